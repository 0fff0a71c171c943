import io
import logging

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from jobseeker.schemas.profile import UploadResult
from jobseeker.services.document_store import DocumentStore, DocumentStoreError
from jobseeker.services.object_storage import ObjectStorage, StorageError

logger = logging.getLogger(__name__)

USERS = "Users"


def ensure_pdf(content: bytes) -> int:
    """Return the page count, or raise ValueError when ``content`` is not a readable PDF."""
    try:
        reader = PdfReader(io.BytesIO(content))
        pages = len(reader.pages)
    except (PdfReadError, ValueError, KeyError, TypeError) as exc:
        raise ValueError("Resume must be a PDF document") from exc
    if pages == 0:
        raise ValueError("Resume PDF has no pages")
    return pages


async def upload_resume(
    documents: DocumentStore,
    storage: ObjectStorage,
    user_id: str,
    file_name: str,
    content: bytes,
) -> UploadResult:
    try:
        ensure_pdf(content)
        url = await storage.upload(f"resumes/{user_id}/{file_name}", content)
        await documents.update_document(USERS, user_id, {
            "resumeUrl": url,
            "resumeName": file_name,
        })
    except (ValueError, StorageError, DocumentStoreError) as exc:
        logger.error("Error uploading resume: %s", exc)
        return UploadResult(success=False, error=str(exc))
    return UploadResult(success=True, url=url)


async def delete_resume(
    documents: DocumentStore,
    storage: ObjectStorage,
    user_id: str,
    resume_name: str,
) -> UploadResult:
    try:
        await storage.delete(f"resumes/{user_id}/{resume_name}")
        await documents.update_document(USERS, user_id, {
            "resumeUrl": None,
            "resumeName": None,
        })
    except (StorageError, DocumentStoreError) as exc:
        logger.error("Error deleting resume: %s", exc)
        return UploadResult(success=False, error=str(exc))
    return UploadResult(success=True)


async def upload_profile_picture(
    documents: DocumentStore,
    storage: ObjectStorage,
    user_id: str,
    content: bytes,
) -> UploadResult:
    try:
        url = await storage.upload(f"profilePics/{user_id}", content)
        await documents.update_document(USERS, user_id, {"profilePic": url})
    except (StorageError, DocumentStoreError) as exc:
        logger.error("Error uploading profile picture: %s", exc)
        return UploadResult(success=False, error=str(exc))
    return UploadResult(success=True, url=url)
