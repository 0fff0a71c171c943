from fastapi import APIRouter, Depends

from jobseeker.dependencies import get_platform, require_session
from jobseeker.schemas.application import Application, ApplicationStats
from jobseeker.schemas.session import Identity
from jobseeker.services import job_actions
from jobseeker.services.platform import Platform

router = APIRouter(prefix="/applications", tags=["applications"])


@router.get("", response_model=list[Application])
async def list_applications(
    identity: Identity = Depends(require_session),
    platform: Platform = Depends(get_platform),
):
    return await job_actions.get_applications_by_user(platform.documents, identity.uid)


@router.get("/stats", response_model=ApplicationStats)
async def get_application_stats(
    identity: Identity = Depends(require_session),
    platform: Platform = Depends(get_platform),
):
    applications = await job_actions.get_applications_by_user(platform.documents, identity.uid)
    return job_actions.application_stats(applications)
