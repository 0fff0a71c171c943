"""
Listing query/filter engine for the job list screens.

``apply_filters`` is a pure function of a collection and a ``FilterState``.
``ListingEngine`` holds one screen's collection and drives its
idle -> loading -> ready | error cycle, painting the cached copy first and
replacing it once the store answers.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from jobseeker.config import settings
from jobseeker.schemas.job import ALL, FilterState, Job
from jobseeker.services.cache_service import LocalCache
from jobseeker.services.document_store import DocumentStore, DocumentStoreError
from jobseeker.services.job_actions import jobs_from_snapshots

logger = logging.getLogger(__name__)

JOBS = "Jobs"


class ListingStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class ListingFetchError(Exception):
    pass


def _selected(selection: str | None, value: str | None) -> bool:
    if not selection or selection == ALL:
        return True
    return value == selection


def _matches_search(job: Job, needle: str) -> bool:
    return any(
        needle in (field or "").lower()
        for field in (job.title, job.company, job.location, job.description)
    )


def apply_filters(listings: Iterable[Job], filters: FilterState) -> list[Job]:
    """Keep listings passing every active predicate, in their original order."""
    needle = filters.search_text.lower()
    return [
        job
        for job in listings
        if _selected(filters.category, job.category)
        and _selected(filters.job_type, job.job_type)
        and _selected(filters.level, job.level)
        and (not needle or _matches_search(job, needle))
    ]


@dataclass(frozen=True)
class FetchToken:
    generation: int


class ListingEngine:
    def __init__(
        self,
        documents: DocumentStore,
        cache: LocalCache | None = None,
        cache_key: str | None = None,
    ):
        self._documents = documents
        self._cache = cache
        self._cache_key = cache_key or settings.listings_cache_key
        self._generation = 0
        self.status = ListingStatus.IDLE
        self.listings: list[Job] = []
        self.error: str | None = None

    def begin_fetch(self) -> FetchToken:
        self._generation += 1
        return FetchToken(self._generation)

    def is_current(self, token: FetchToken) -> bool:
        return token.generation == self._generation

    def cancel(self):
        """Drop every in-flight fetch, e.g. when the screen goes away."""
        self._generation += 1
        if self.status == ListingStatus.LOADING:
            self.status = ListingStatus.READY if self.listings else ListingStatus.IDLE

    def load_cached(self) -> bool:
        if self._cache is None:
            return False
        try:
            cached = self._cache.get_json(self._cache_key)
        except (ValueError, SQLAlchemyError) as exc:
            logger.warning("Ignoring unreadable listings cache: %s", exc)
            return False
        if not isinstance(cached, list):
            return False
        try:
            self.listings = [Job.model_validate(item) for item in cached]
        except ValidationError as exc:
            logger.warning("Ignoring malformed listings cache: %s", exc)
            self._cache.remove_item(self._cache_key)
            return False
        self.status = ListingStatus.READY
        return True

    def _write_cache(self, jobs: list[Job]):
        if self._cache is None:
            return
        try:
            self._cache.set_json(self._cache_key, [j.model_dump(by_alias=True) for j in jobs])
        except SQLAlchemyError as exc:
            logger.warning("Could not cache listings: %s", exc)

    async def load_listings(self, token: FetchToken | None = None) -> list[Job]:
        token = token or self.begin_fetch()
        if self.is_current(token):
            self.status = ListingStatus.LOADING
            self.error = None
        try:
            snapshots = await self._documents.query_collection(JOBS, order_by="postedAt", descending=True)
            jobs = jobs_from_snapshots(snapshots)
        except DocumentStoreError as exc:
            logger.error("Error fetching jobs: %s", exc)
            if self.is_current(token):
                # Previously loaded listings stay available
                self.status = ListingStatus.ERROR
                self.error = str(exc)
            raise ListingFetchError(str(exc)) from exc

        if not self.is_current(token):
            logger.debug("Discarding stale listing fetch %d", token.generation)
            return self.listings

        self.listings = jobs
        self.status = ListingStatus.READY
        self._write_cache(jobs)
        return jobs

    async def refresh(self) -> list[Job]:
        """Cache-then-fetch: paint the cached copy if there is one, then fetch fresh data."""
        token = self.begin_fetch()
        if not self.listings:
            self.load_cached()
        return await self.load_listings(token)

    def visible(self, filters: FilterState) -> list[Job]:
        return apply_filters(self.listings, filters)
