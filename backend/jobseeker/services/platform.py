from pathlib import Path

from sqlalchemy.orm import sessionmaker

from jobseeker.config import settings
from jobseeker.services.cache_service import LocalCache, ThemePreference
from jobseeker.services.document_store import DocumentStore
from jobseeker.services.identity_service import IdentityProvider
from jobseeker.services.listing_service import ListingEngine
from jobseeker.services.object_storage import ObjectStorage
from jobseeker.services.session_service import SessionController, SessionState


class Platform:
    """The hosted collaborators and the app-wide controllers built on top of them."""

    def __init__(self, session_factory: sessionmaker, storage_dir: Path | None = None):
        self.documents = DocumentStore(session_factory)
        self.identity = IdentityProvider(session_factory)
        self.storage = ObjectStorage(storage_dir or settings.storage_dir, settings.storage_base_url)
        self.cache = LocalCache(session_factory)
        self.session = SessionController(self.identity, self.documents)
        self.listings = ListingEngine(self.documents, self.cache, settings.listings_cache_key)
        self.theme = ThemePreference(self.cache, settings.theme_cache_key)
        self.session.add_listener(self._on_session_changed)

    def _on_session_changed(self, state: SessionState):
        # Signed-out screens are gone; their pending listing fetches must not land
        if state.identity is None and not state.loading:
            self.listings.cancel()
