"""
Identity provider: issues opaque user identities for email/password accounts
and notifies subscribers whenever the signed-in identity changes.
"""
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from jobseeker.config import settings
from jobseeker.models.account import Account
from jobseeker.schemas.session import Identity
from jobseeker.utils.security import generate_uid, hash_password, verify_password
from jobseeker.utils.validation import is_valid_email

logger = logging.getLogger(__name__)

AuthListener = Callable[[Identity | None], Awaitable[None]]


class IdentityError(Exception):
    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class IdentityProvider:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._listeners: list[AuthListener] = []
        self._current: Identity | None = None

    async def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Register ``listener`` and immediately replay the current state to it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        await self._deliver(listener, self._current)
        return unsubscribe

    async def _deliver(self, listener: AuthListener, identity: Identity | None):
        try:
            await listener(identity)
        except Exception:
            logger.exception("Auth state listener failed")

    async def _notify(self):
        for listener in list(self._listeners):
            await self._deliver(listener, self._current)

    async def create_account(self, email: str, password: str) -> Identity:
        email = email.strip().lower()
        if not is_valid_email(email):
            raise IdentityError("auth/invalid-email", "The email address is badly formatted.")
        if len(password) < settings.min_password_length:
            raise IdentityError(
                "auth/weak-password",
                f"Password should be at least {settings.min_password_length} characters.",
            )

        uid = generate_uid()
        now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        db = self._session_factory()
        try:
            if db.query(Account).filter(Account.email == email).first():
                raise IdentityError("auth/email-already-in-use", "The email address is already in use by another account.")
            db.add(Account(uid=uid, email=email, password_hash=hash_password(password), created_at=now))
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise IdentityError("auth/email-already-in-use", "The email address is already in use by another account.") from exc
        except SQLAlchemyError as exc:
            db.rollback()
            raise IdentityError("auth/internal-error", str(exc)) from exc
        finally:
            db.close()

        logger.info("Created account %s", uid)
        self._current = Identity(uid=uid, email=email)
        await self._notify()
        return self._current

    async def sign_in(self, email: str, password: str) -> Identity:
        email = email.strip().lower()
        db = self._session_factory()
        try:
            account = db.query(Account).filter(Account.email == email).first()
        except SQLAlchemyError as exc:
            raise IdentityError("auth/internal-error", str(exc)) from exc
        finally:
            db.close()

        if not account or not verify_password(account.password_hash, password):
            raise IdentityError("auth/invalid-credential", "Invalid email or password.")

        identity = Identity(uid=account.uid, email=account.email)
        self._current = identity
        await self._notify()
        return identity

    async def sign_out(self) -> None:
        if self._current is None:
            return
        self._current = None
        await self._notify()
