import asyncio

import pytest

from jobseeker.schemas.job import FilterState
from jobseeker.services.cache_service import LocalCache
from jobseeker.services.document_store import DocumentStore, DocumentStoreError
from jobseeker.services.listing_service import (
    ListingEngine,
    ListingFetchError,
    ListingStatus,
)

CACHE_KEY = "@test_jobs"


class FlakyDocuments:
    """Delegates to a real store until ``fail`` is switched on."""

    def __init__(self, documents):
        self._documents = documents
        self.fail = False

    async def query_collection(self, *args, **kwargs):
        if self.fail:
            raise DocumentStoreError("network down")
        return await self._documents.query_collection(*args, **kwargs)


class GatedDocuments:
    def __init__(self, documents, gate):
        self._documents = documents
        self._gate = gate

    async def query_collection(self, *args, **kwargs):
        await self._gate.wait()
        return await self._documents.query_collection(*args, **kwargs)


@pytest.fixture
def documents(test_db):
    store = DocumentStore(test_db)

    async def seed():
        await store.set_document("Jobs", "old", {"title": "Old Job", "company": "A",
                                                 "category": "Design", "postedAt": "2025-01-01T00:00:00"})
        await store.set_document("Jobs", "new", {"title": "New Job", "company": "B",
                                                 "category": "Development", "postedAt": "2025-02-01T00:00:00"})

    asyncio.run(seed())
    return store


@pytest.fixture
def cache(test_db):
    return LocalCache(test_db)


class TestListingEngine:
    def test_starts_idle(self, documents):
        engine = ListingEngine(documents)
        assert engine.status == ListingStatus.IDLE
        assert engine.listings == []

    def test_load_orders_newest_first_and_caches(self, documents, cache):
        engine = ListingEngine(documents, cache, CACHE_KEY)
        jobs = asyncio.run(engine.load_listings())

        assert [j.id for j in jobs] == ["new", "old"]
        assert engine.status == ListingStatus.READY
        cached = cache.get_json(CACHE_KEY)
        assert [item["id"] for item in cached] == ["new", "old"]

    def test_cached_copy_painted_before_fetch(self, documents, cache):
        asyncio.run(ListingEngine(documents, cache, CACHE_KEY).load_listings())

        engine = ListingEngine(documents, cache, CACHE_KEY)
        assert engine.load_cached() is True
        assert engine.status == ListingStatus.READY
        assert [j.id for j in engine.listings] == ["new", "old"]

    def test_malformed_cache_is_ignored(self, documents, cache):
        cache.set_item(CACHE_KEY, "{not json")
        engine = ListingEngine(documents, cache, CACHE_KEY)
        assert engine.load_cached() is False
        assert engine.status == ListingStatus.IDLE

        cache.set_json(CACHE_KEY, [{"title": "missing id and company"}])
        assert engine.load_cached() is False
        assert cache.get_item(CACHE_KEY) is None

    def test_refresh_replaces_cached_copy(self, documents, cache):
        cache.set_json(CACHE_KEY, [{"id": "stale", "title": "Stale", "company": "Z"}])
        engine = ListingEngine(documents, cache, CACHE_KEY)

        jobs = asyncio.run(engine.refresh())
        assert [j.id for j in jobs] == ["new", "old"]
        assert [j.id for j in engine.listings] == ["new", "old"]

    def test_refresh_failure_keeps_cached_copy(self, documents, cache):
        asyncio.run(ListingEngine(documents, cache, CACHE_KEY).load_listings())
        flaky = FlakyDocuments(documents)
        flaky.fail = True
        engine = ListingEngine(flaky, cache, CACHE_KEY)

        with pytest.raises(ListingFetchError):
            asyncio.run(engine.refresh())
        assert engine.status == ListingStatus.ERROR
        assert [j.id for j in engine.listings] == ["new", "old"]

    def test_failure_keeps_previous_listings(self, documents):
        flaky = FlakyDocuments(documents)
        engine = ListingEngine(flaky)
        asyncio.run(engine.load_listings())

        flaky.fail = True
        with pytest.raises(ListingFetchError):
            asyncio.run(engine.load_listings())
        assert engine.status == ListingStatus.ERROR
        assert engine.error == "network down"
        assert [j.id for j in engine.listings] == ["new", "old"]

        flaky.fail = False
        asyncio.run(engine.load_listings())
        assert engine.status == ListingStatus.READY
        assert engine.error is None

    def test_stale_fetch_is_discarded(self, documents):
        engine = ListingEngine(documents)
        stale = engine.begin_fetch()
        engine.begin_fetch()

        asyncio.run(engine.load_listings(stale))
        assert engine.listings == []
        assert engine.status == ListingStatus.IDLE

    def test_cancel_discards_in_flight_fetch(self, documents):
        async def scenario():
            gate = asyncio.Event()
            engine = ListingEngine(GatedDocuments(documents, gate))
            task = asyncio.create_task(engine.load_listings())
            await asyncio.sleep(0)
            assert engine.status == ListingStatus.LOADING
            engine.cancel()
            gate.set()
            await task
            return engine

        engine = asyncio.run(scenario())
        assert engine.listings == []
        assert engine.status == ListingStatus.IDLE

    def test_visible_filters_current_collection(self, documents):
        engine = ListingEngine(documents)
        asyncio.run(engine.load_listings())

        assert [j.id for j in engine.visible(FilterState(category="Design"))] == ["old"]
        assert [j.id for j in engine.visible(FilterState(search_text="new"))] == ["new"]
        assert [j.id for j in engine.visible(FilterState())] == ["new", "old"]
