import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from jobseeker.dependencies import get_platform, require_session
from jobseeker.schemas.application import Application
from jobseeker.schemas.job import (
    ALL,
    JOB_CATEGORIES,
    FilterState,
    Job,
    JobDetailResponse,
    JobListResponse,
    SalaryInsight,
    SeedResponse,
)
from jobseeker.schemas.saved_job import SaveToggleResponse
from jobseeker.schemas.session import Identity
from jobseeker.services import job_actions
from jobseeker.services.listing_service import ListingFetchError, ListingStatus
from jobseeker.services.platform import Platform
from jobseeker.services.salary_service import salary_insight_for
from jobseeker.services.seed_service import seed_jobs
from jobseeker.utils.formatting import format_date, share_message

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/jobs",
    tags=["jobs"],
    dependencies=[Depends(require_session)],
)

GENERIC_ERROR = "Something went wrong. Please try again."


def _posted_label(job: Job) -> str | None:
    if not job.posted_at:
        return None
    try:
        return format_date(job.posted_at)
    except ValueError:
        logger.warning("Unreadable postedAt on job %s: %r", job.id, job.posted_at)
        return None


async def _get_job_or_404(platform: Platform, job_id: str):
    job = await job_actions.get_job_by_id(platform.documents, job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.get("", response_model=JobListResponse)
async def list_jobs(
    q: str = "",
    category: str = ALL,
    job_type: str = Query(ALL, alias="type"),
    level: str = ALL,
    refresh: bool = False,
    platform: Platform = Depends(get_platform),
):
    engine = platform.listings
    # Only the first request loads on its own; after a failure the caller retries with refresh
    if refresh or engine.status == ListingStatus.IDLE:
        try:
            await engine.refresh()
        except ListingFetchError as exc:
            logger.warning("Listing refresh failed: %s", exc)
    if engine.status == ListingStatus.ERROR and not engine.listings:
        raise HTTPException(status_code=503, detail=GENERIC_ERROR)

    filters = FilterState(search_text=q, category=category, job_type=job_type, level=level)
    visible = engine.visible(filters)
    return JobListResponse(
        jobs=visible,
        total=len(visible),
        status=engine.status.value,
        error=engine.error,
    )


@router.post("/seed", response_model=SeedResponse)
async def seed(platform: Platform = Depends(get_platform)):
    result = await seed_jobs(platform.documents)
    if result.success:
        try:
            await platform.listings.load_listings()
        except ListingFetchError as exc:
            logger.warning("Seeded jobs but could not reload listings: %s", exc)
    return result


@router.get("/categories", response_model=list[str])
async def list_categories():
    return JOB_CATEGORIES


@router.get("/{job_id}", response_model=JobDetailResponse)
async def get_job(
    job_id: str,
    identity: Identity = Depends(require_session),
    platform: Platform = Depends(get_platform),
):
    job = await _get_job_or_404(platform, job_id)
    return JobDetailResponse(
        job=job,
        similar_jobs=await job_actions.get_similar_jobs(platform.documents, job),
        salary_insight=await salary_insight_for(platform.documents, job),
        is_applied=await job_actions.has_applied_to_job(platform.documents, identity.uid, job_id),
        is_saved=await job_actions.is_job_saved(platform.documents, identity.uid, job_id),
        share_text=share_message(job.title, job.company, job.location),
        posted_label=_posted_label(job),
    )


@router.get("/{job_id}/salary-insight", response_model=SalaryInsight | None)
async def get_salary_insight(job_id: str, platform: Platform = Depends(get_platform)):
    job = await _get_job_or_404(platform, job_id)
    return await salary_insight_for(platform.documents, job)


@router.post("/{job_id}/application", response_model=Application, status_code=201)
async def apply(
    job_id: str,
    identity: Identity = Depends(require_session),
    platform: Platform = Depends(get_platform),
):
    job = await _get_job_or_404(platform, job_id)
    if await job_actions.has_applied_to_job(platform.documents, identity.uid, job_id):
        raise HTTPException(status_code=409, detail="Already applied to this job")
    return await job_actions.apply_for_job(platform.documents, identity.uid, job)


@router.delete("/{job_id}/application")
async def withdraw(
    job_id: str,
    identity: Identity = Depends(require_session),
    platform: Platform = Depends(get_platform),
):
    if not await job_actions.withdraw_application(platform.documents, identity.uid, job_id):
        raise HTTPException(status_code=404, detail="Application not found")
    return {"message": "Application withdrawn"}


@router.post("/{job_id}/save", response_model=SaveToggleResponse)
async def toggle_save(
    job_id: str,
    identity: Identity = Depends(require_session),
    platform: Platform = Depends(get_platform),
):
    job = await _get_job_or_404(platform, job_id)
    saved = await job_actions.toggle_saved_job(platform.documents, identity.uid, job)
    return SaveToggleResponse(saved=saved)
