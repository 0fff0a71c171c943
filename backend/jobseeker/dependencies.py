from fastapi import Depends, Header, HTTPException

from jobseeker.database import SessionLocal
from jobseeker.schemas.session import Identity
from jobseeker.services.platform import Platform

_platform: Platform | None = None


def get_platform() -> Platform:
    global _platform
    if _platform is None:
        _platform = Platform(SessionLocal)
    return _platform


def bearer_token(authorization: str | None = Header(None)) -> str | None:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return authorization[7:]


async def require_session(
    token: str | None = Depends(bearer_token),
    platform: Platform = Depends(get_platform),
) -> Identity:
    state = platform.session.state
    if state.loading:
        raise HTTPException(status_code=503, detail="Session is still loading")
    if state.identity is None:
        raise HTTPException(status_code=401, detail="Not signed in")
    if token is None:
        raise HTTPException(status_code=401, detail="Missing bearer token")
    if not platform.session.validate_token(token):
        raise HTTPException(status_code=401, detail="Session token is invalid or expired")
    return state.identity
