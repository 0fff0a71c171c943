from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from jobseeker.config import settings
from jobseeker.dependencies import get_platform, require_session
from jobseeker.schemas.profile import (
    ProfileStats,
    ProfileUpdate,
    SkillRequest,
    UploadResult,
    UserProfile,
)
from jobseeker.schemas.session import Identity
from jobseeker.services import job_actions, upload_service
from jobseeker.services.document_store import DocumentNotFoundError
from jobseeker.services.platform import Platform
from jobseeker.utils.validation import is_valid_phone

router = APIRouter(prefix="/profile", tags=["profile"])


async def _read_upload(file: UploadFile) -> bytes:
    max_bytes = settings.max_upload_bytes
    size = 0
    chunks: list[bytes] = []
    while True:
        chunk = await file.read(1024 * 1024)
        if not chunk:
            break
        size += len(chunk)
        if size > max_bytes:
            raise HTTPException(status_code=413, detail=f"File too large (max {max_bytes} bytes)")
        chunks.append(chunk)

    content = b"".join(chunks)
    if not content:
        raise HTTPException(status_code=400, detail="Empty file")
    return content


async def _current_profile(platform: Platform) -> UserProfile:
    profile = await platform.session.refresh_profile()
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.get("", response_model=UserProfile)
async def get_profile(
    _identity: Identity = Depends(require_session),
    platform: Platform = Depends(get_platform),
):
    profile = platform.session.state.profile
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.put("", response_model=UserProfile)
async def update_profile(
    req: ProfileUpdate,
    identity: Identity = Depends(require_session),
    platform: Platform = Depends(get_platform),
):
    fields = req.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in fields:
        fields["name"] = fields["name"].strip()
        if not fields["name"]:
            raise HTTPException(status_code=400, detail="Name is required")
    if "phone" in fields and not is_valid_phone(fields["phone"]):
        raise HTTPException(status_code=400, detail="Invalid phone number")
    if fields:
        try:
            await job_actions.update_user_profile(platform.documents, identity.uid, fields)
        except DocumentNotFoundError as exc:
            raise HTTPException(status_code=404, detail="Profile not found") from exc
    return await _current_profile(platform)


@router.post("/skills", response_model=UserProfile)
async def add_skill(
    req: SkillRequest,
    identity: Identity = Depends(require_session),
    platform: Platform = Depends(get_platform),
):
    try:
        added = await job_actions.add_skill(platform.documents, identity.uid, req.skill)
    except DocumentNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Profile not found") from exc
    if not added:
        raise HTTPException(status_code=400, detail="Skill must not be empty")
    return await _current_profile(platform)


@router.delete("/skills/{skill}", response_model=UserProfile)
async def remove_skill(
    skill: str,
    identity: Identity = Depends(require_session),
    platform: Platform = Depends(get_platform),
):
    try:
        await job_actions.remove_skill(platform.documents, identity.uid, skill)
    except DocumentNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Profile not found") from exc
    return await _current_profile(platform)


@router.get("/stats", response_model=ProfileStats)
async def get_profile_stats(
    identity: Identity = Depends(require_session),
    platform: Platform = Depends(get_platform),
):
    return await job_actions.profile_stats(platform.documents, identity.uid)


@router.post("/photo", response_model=UploadResult)
async def upload_photo(
    file: UploadFile = File(...),
    identity: Identity = Depends(require_session),
    platform: Platform = Depends(get_platform),
):
    if file.content_type and not file.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Profile photo must be an image")
    content = await _read_upload(file)
    result = await upload_service.upload_profile_picture(platform.documents, platform.storage, identity.uid, content)
    if result.success:
        await platform.session.refresh_profile()
    return result


@router.post("/resume", response_model=UploadResult)
async def upload_resume(
    file: UploadFile = File(...),
    identity: Identity = Depends(require_session),
    platform: Platform = Depends(get_platform),
):
    content = await _read_upload(file)
    result = await upload_service.upload_resume(
        platform.documents, platform.storage, identity.uid, file.filename or "resume.pdf", content,
    )
    if not result.success:
        raise HTTPException(status_code=400, detail=result.error)
    await platform.session.refresh_profile()
    return result


@router.delete("/resume", response_model=UploadResult)
async def delete_resume(
    identity: Identity = Depends(require_session),
    platform: Platform = Depends(get_platform),
):
    profile = platform.session.state.profile
    if profile is None or not profile.resume_name:
        raise HTTPException(status_code=404, detail="No resume uploaded")
    result = await upload_service.delete_resume(platform.documents, platform.storage, identity.uid, profile.resume_name)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.error)
    await platform.session.refresh_profile()
    return result
