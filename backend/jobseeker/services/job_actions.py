"""Reads and writes against the Jobs, Applications, SavedJobs and Users collections."""
import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Iterable

from pydantic import ValidationError

from jobseeker.config import settings
from jobseeker.schemas.application import Application, ApplicationStats, ApplicationStatus
from jobseeker.schemas.job import Job
from jobseeker.schemas.profile import ProfileStats
from jobseeker.schemas.saved_job import SavedJob
from jobseeker.services.document_store import (
    DOCUMENT_ID,
    DocumentSnapshot,
    DocumentStore,
    Where,
    array_remove,
    array_union,
)

logger = logging.getLogger(__name__)

JOBS = "Jobs"
USERS = "Users"
APPLICATIONS = "Applications"
SAVED_JOBS = "SavedJobs"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def record_id(user_id: str, job_id: str) -> str:
    """Applications and bookmarks are keyed by user and job, one per pair."""
    return f"{user_id}_{job_id}"


# ============================================
# Jobs
# ============================================

def job_from_document(doc_id: str, data: dict) -> Job | None:
    """Decode a Jobs document, or None when it does not fit the listing shape."""
    try:
        return Job.from_document(doc_id, data)
    except ValidationError as exc:
        logger.warning("Skipping malformed job %s: %s", doc_id, exc)
        return None


def jobs_from_snapshots(snapshots: Iterable[DocumentSnapshot]) -> list[Job]:
    jobs = (job_from_document(s.id, s.data) for s in snapshots)
    return [job for job in jobs if job is not None]


async def get_job_by_id(documents: DocumentStore, job_id: str) -> Job | None:
    data = await documents.get_document(JOBS, job_id)
    return job_from_document(job_id, data) if data else None


async def get_similar_jobs(documents: DocumentStore, job: Job, limit: int | None = None) -> list[Job]:
    if not job.category:
        return []
    snapshots = await documents.query_collection(
        JOBS,
        [Where("category", "==", job.category), Where(DOCUMENT_ID, "!=", job.id)],
        limit=settings.similar_jobs_limit if limit is None else limit,
    )
    return jobs_from_snapshots(snapshots)


# ============================================
# Applications
# ============================================

async def apply_for_job(documents: DocumentStore, user_id: str, job: Job) -> Application:
    application_id = record_id(user_id, job.id)
    fields = {
        "userId": user_id,
        "jobId": job.id,
        "jobTitle": job.title,
        "company": job.company,
        "location": job.location,
        "salary": job.salary,
        "status": ApplicationStatus.PENDING.value,
        "appliedAt": _now(),
    }
    await documents.set_document(APPLICATIONS, application_id, fields)
    logger.info("User %s applied to job %s", user_id, job.id)
    return Application.from_document(application_id, fields)


async def has_applied_to_job(documents: DocumentStore, user_id: str, job_id: str) -> bool:
    return await documents.get_document(APPLICATIONS, record_id(user_id, job_id)) is not None


async def withdraw_application(documents: DocumentStore, user_id: str, job_id: str) -> bool:
    return await documents.delete_document(APPLICATIONS, record_id(user_id, job_id))


async def get_applications_by_user(documents: DocumentStore, user_id: str) -> list[Application]:
    snapshots = await documents.query_collection(
        APPLICATIONS,
        [Where("userId", "==", user_id)],
        order_by="appliedAt",
        descending=True,
    )
    return [Application.from_document(s.id, s.data) for s in snapshots]


def application_stats(applications: list[Application]) -> ApplicationStats:
    counts = Counter(a.status.value for a in applications)
    return ApplicationStats(
        total=len(applications),
        pending=counts.get(ApplicationStatus.PENDING.value, 0),
        accepted=counts.get(ApplicationStatus.ACCEPTED.value, 0),
        rejected=counts.get(ApplicationStatus.REJECTED.value, 0),
        by_status={s.value: counts.get(s.value, 0) for s in ApplicationStatus},
    )


# ============================================
# Saved jobs
# ============================================

async def is_job_saved(documents: DocumentStore, user_id: str, job_id: str) -> bool:
    return await documents.get_document(SAVED_JOBS, record_id(user_id, job_id)) is not None


async def toggle_saved_job(documents: DocumentStore, user_id: str, job: Job) -> bool:
    """Bookmark ``job`` or remove the bookmark. Returns whether it is saved afterwards."""
    saved_id = record_id(user_id, job.id)
    if await documents.delete_document(SAVED_JOBS, saved_id):
        return False
    await documents.set_document(SAVED_JOBS, saved_id, {
        "userId": user_id,
        "jobId": job.id,
        "jobTitle": job.title,
        "company": job.company,
        "savedAt": _now(),
    })
    return True


async def get_saved_records(documents: DocumentStore, user_id: str) -> list[SavedJob]:
    snapshots = await documents.query_collection(
        SAVED_JOBS,
        [Where("userId", "==", user_id)],
        order_by="savedAt",
        descending=True,
    )
    return [SavedJob.model_validate({**s.data, "id": s.id}) for s in snapshots]


async def get_saved_jobs(documents: DocumentStore, user_id: str) -> list[Job]:
    jobs = []
    for record in await get_saved_records(documents, user_id):
        job = await get_job_by_id(documents, record.job_id)
        if job is None:
            logger.info("Saved job %s no longer exists", record.job_id)
            continue
        jobs.append(job)
    return jobs


# ============================================
# Users
# ============================================

async def update_user_profile(documents: DocumentStore, user_id: str, fields: dict) -> None:
    await documents.update_document(USERS, user_id, fields)


async def add_skill(documents: DocumentStore, user_id: str, skill: str) -> bool:
    skill = skill.strip()
    if not skill:
        return False
    await documents.update_document(USERS, user_id, {"skills": array_union(skill)})
    return True


async def remove_skill(documents: DocumentStore, user_id: str, skill: str) -> None:
    await documents.update_document(USERS, user_id, {"skills": array_remove(skill)})


async def profile_stats(documents: DocumentStore, user_id: str) -> ProfileStats:
    by_user = [Where("userId", "==", user_id)]
    applications = await documents.query_collection(APPLICATIONS, by_user)
    saved = await documents.query_collection(SAVED_JOBS, by_user)
    return ProfileStats(applications=len(applications), saved=len(saved))
