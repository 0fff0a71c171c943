"""
Session bootstrap.

One ``SessionController`` owns the ``SessionState`` for the running app. It
listens to the identity provider, keeps the signed-in user's profile document
in memory and exposes the account operations. Every auth notification starts
a new generation; results from an older generation are dropped so a slow
profile read can never overwrite a newer session.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from jobseeker.schemas.profile import UserProfile
from jobseeker.schemas.session import AuthFailure, AuthResult, AuthSuccess, Identity
from jobseeker.services.document_store import DocumentStore, DocumentStoreError
from jobseeker.services.identity_service import IdentityError, IdentityProvider
from jobseeker.utils.security import generate_token

logger = logging.getLogger(__name__)

USERS = "Users"

SessionListener = Callable[["SessionState"], None]


@dataclass
class SessionState:
    identity: Identity | None = None
    profile: UserProfile | None = None
    loading: bool = True

    @property
    def profile_degraded(self) -> bool:
        return self.identity is not None and self.profile is None


class SessionController:
    def __init__(self, provider: IdentityProvider, documents: DocumentStore):
        self._provider = provider
        self._documents = documents
        self.state = SessionState()
        self._generation = 0
        self._unsubscribe: Callable[[], None] | None = None
        self._listeners: list[SessionListener] = []
        self._tokens: set[str] = set()

    # -- observation -------------------------------------------------------

    def add_listener(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener) if listener in self._listeners else None

    def _emit(self):
        for listener in list(self._listeners):
            listener(self.state)

    @property
    def started(self) -> bool:
        return self._unsubscribe is not None

    async def start(self):
        """Subscribe to auth-state changes. Resolves once the first notification is handled."""
        if self._unsubscribe is not None:
            return
        self._unsubscribe = await self._provider.subscribe(self._on_auth_state_changed)

    def stop(self):
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._generation += 1
        self._clear()

    def _is_current(self, identity: Identity) -> bool:
        return self.state.identity is not None and self.state.identity.uid == identity.uid

    def _clear(self):
        self.state.identity = None
        self.state.profile = None
        self.state.loading = False
        self._tokens.clear()
        self._emit()

    async def _load_profile(self, uid: str) -> UserProfile | None:
        data = await self._documents.get_document(USERS, uid)
        return UserProfile.model_validate(data) if data else None

    async def _on_auth_state_changed(self, identity: Identity | None):
        self._generation += 1
        generation = self._generation
        self.state.loading = True
        try:
            if identity is None:
                self.state.identity = None
                self.state.profile = None
                self._tokens.clear()
                return
            # Redundant notification for the session we already hold
            if self._is_current(identity) and self.state.profile is not None:
                return
            if not self._is_current(identity):
                self.state.identity = identity
                self.state.profile = None
                self._tokens.clear()
            profile = await self._load_profile(identity.uid)
            if generation == self._generation and self._is_current(identity):
                self.state.profile = profile
        except DocumentStoreError as exc:
            # Keep the identity; the session is authenticated but profile-degraded
            logger.error("Error fetching profile for %s: %s", identity.uid, exc)
        finally:
            if generation == self._generation:
                self.state.loading = False
                self._emit()

    def _settle(self, identity: Identity, profile: UserProfile | None):
        if not self._is_current(identity):
            self._generation += 1
            self.state.identity = identity
            self.state.profile = None
            self._tokens.clear()
        if profile is not None:
            self.state.profile = profile
        self.state.loading = False
        self._emit()

    # -- access tokens -------------------------------------------------------

    def issue_token(self) -> str | None:
        """Mint a bearer token for the signed-in identity. Tokens die with the session."""
        if self.state.identity is None:
            return None
        token = generate_token()
        self._tokens.add(token)
        return token

    def validate_token(self, token: str | None) -> bool:
        return bool(token) and self.state.identity is not None and token in self._tokens

    # -- account operations ------------------------------------------------

    async def sign_up(self, email: str, password: str, name: str, phone: str) -> AuthResult:
        try:
            identity = await self._provider.create_account(email, password)
        except IdentityError as exc:
            logger.warning("Sign-up failed: %s", exc.code)
            return AuthFailure(message=exc.message)

        profile = UserProfile(
            uid=identity.uid,
            name=name,
            email=identity.email,
            phone=phone,
            profile_pic="",
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        try:
            await self._documents.set_document(USERS, identity.uid, profile.model_dump(by_alias=True, exclude_none=True))
        except DocumentStoreError as exc:
            logger.error("Could not create profile for %s: %s", identity.uid, exc)
            return AuthFailure(message=str(exc))

        self._settle(identity, profile)
        return AuthSuccess()

    async def sign_in(self, email: str, password: str) -> AuthResult:
        try:
            identity = await self._provider.sign_in(email, password)
        except IdentityError as exc:
            logger.warning("Sign-in failed: %s", exc.code)
            return AuthFailure(message=exc.message)

        # The auth notification normally settles the session already
        if not self._is_current(identity):
            profile = None
            try:
                profile = await self._load_profile(identity.uid)
            except DocumentStoreError as exc:
                logger.error("Error fetching profile for %s: %s", identity.uid, exc)
            self._settle(identity, profile)
        elif self.state.loading:
            self.state.loading = False
            self._emit()
        return AuthSuccess()

    async def sign_out(self) -> AuthResult:
        try:
            await self._provider.sign_out()
        except IdentityError as exc:
            logger.warning("Sign-out failed: %s", exc.code)
            return AuthFailure(message=exc.message)
        self._generation += 1
        self._clear()
        return AuthSuccess()

    async def refresh_profile(self) -> UserProfile | None:
        identity = self.state.identity
        if identity is None:
            return None
        generation = self._generation
        try:
            profile = await self._load_profile(identity.uid)
        except DocumentStoreError as exc:
            logger.error("Error refreshing profile for %s: %s", identity.uid, exc)
            return self.state.profile
        if profile is not None and generation == self._generation and self._is_current(identity):
            self.state.profile = profile
            self._emit()
        return self.state.profile
