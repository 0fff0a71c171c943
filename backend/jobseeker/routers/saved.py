from fastapi import APIRouter, Depends

from jobseeker.dependencies import get_platform, require_session
from jobseeker.schemas.job import Job
from jobseeker.schemas.session import Identity
from jobseeker.services import job_actions
from jobseeker.services.platform import Platform

router = APIRouter(prefix="/saved", tags=["saved"])


@router.get("", response_model=list[Job])
async def list_saved_jobs(
    identity: Identity = Depends(require_session),
    platform: Platform = Depends(get_platform),
):
    return await job_actions.get_saved_jobs(platform.documents, identity.uid)
