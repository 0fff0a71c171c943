import json
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from jobseeker.models.cache import CacheEntry
from jobseeker.schemas.preferences import ThemeMode

logger = logging.getLogger(__name__)


class LocalCache:
    """Plain key-value entries kept on the device, no schema versioning."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get_item(self, key: str) -> str | None:
        db = self._session_factory()
        try:
            row = db.get(CacheEntry, key)
            return row.value if row else None
        finally:
            db.close()

    def set_item(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        db = self._session_factory()
        try:
            db.merge(CacheEntry(key=key, value=value, updated_at=now))
            db.commit()
        finally:
            db.close()

    def remove_item(self, key: str) -> None:
        db = self._session_factory()
        try:
            row = db.get(CacheEntry, key)
            if row:
                db.delete(row)
                db.commit()
        finally:
            db.close()

    def get_json(self, key: str) -> Any:
        raw = self.get_item(key)
        return json.loads(raw) if raw is not None else None

    def set_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value))


class ThemePreference:
    def __init__(self, cache: LocalCache, key: str, default: ThemeMode = "light"):
        self._cache = cache
        self._key = key
        self.theme: ThemeMode = default
        self._loaded = False

    def load(self) -> ThemeMode:
        try:
            saved = self._cache.get_item(self._key)
        except SQLAlchemyError as exc:
            logger.error("Error loading theme: %s", exc)
            saved = None
        if saved in ("light", "dark"):
            self.theme = saved
        self._loaded = True
        return self.theme

    def current(self) -> ThemeMode:
        if not self._loaded:
            return self.load()
        return self.theme

    def toggle(self) -> ThemeMode:
        self.theme = "dark" if self.current() == "light" else "light"
        try:
            self._cache.set_item(self._key, self.theme)
        except SQLAlchemyError as exc:
            # The in-memory choice still applies for this run
            logger.error("Error saving theme: %s", exc)
        return self.theme
