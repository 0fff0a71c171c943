import logging
from pathlib import Path

from jobseeker.utils.filesystem import sanitize_filename

logger = logging.getLogger(__name__)


class StorageError(Exception):
    pass


class ObjectStorage:
    """Path-addressed blob storage rooted in a local directory."""

    def __init__(self, root: Path, base_url: str):
        self.root = root
        self.base_url = base_url.rstrip("/")

    def _clean(self, path: str) -> str:
        parts = [p for p in path.strip("/").split("/") if p]
        if not parts or any(p in (".", "..") for p in parts):
            raise StorageError(f"Invalid object path: {path!r}")
        return "/".join(sanitize_filename(p) for p in parts)

    def resolve(self, path: str) -> Path:
        return self.root / self._clean(path)

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{self._clean(path)}"

    async def upload(self, path: str, content: bytes) -> str:
        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        logger.info("Stored object %s (%d bytes)", self._clean(path), len(content))
        return self.url_for(path)

    async def delete(self, path: str) -> None:
        target = self.resolve(path)
        if not target.is_file():
            raise StorageError(f"Object does not exist: {self._clean(path)}")
        target.unlink()
