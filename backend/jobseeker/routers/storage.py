from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from jobseeker.dependencies import get_platform, require_session
from jobseeker.schemas.session import Identity
from jobseeker.services.object_storage import StorageError
from jobseeker.services.platform import Platform

router = APIRouter(prefix="/storage", tags=["storage"])


def _owner(object_path: str) -> str | None:
    # Objects live under resumes/{uid}/... and profilePics/{uid}
    parts = [p for p in object_path.strip("/").split("/") if p]
    return parts[1] if len(parts) >= 2 else None


@router.get("/{object_path:path}")
async def download_object(
    object_path: str,
    identity: Identity = Depends(require_session),
    platform: Platform = Depends(get_platform),
):
    try:
        path = platform.storage.resolve(object_path)
    except StorageError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    if _owner(object_path) != identity.uid or not path.is_file():
        raise HTTPException(status_code=404, detail="Object not found")
    return FileResponse(path=str(path))
