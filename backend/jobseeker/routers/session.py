from fastapi import APIRouter, Depends, HTTPException

from jobseeker.dependencies import bearer_token, get_platform, require_session
from jobseeker.schemas.session import LoginRequest, SessionResponse, SignupRequest
from jobseeker.services.platform import Platform
from jobseeker.services.session_service import SessionState
from jobseeker.utils.validation import validate_login_form, validate_signup_form

router = APIRouter(prefix="/session", tags=["session"])


def _to_response(state: SessionState, token: str | None = None) -> SessionResponse:
    return SessionResponse(
        identity=state.identity,
        profile=state.profile,
        loading=state.loading,
        profile_degraded=state.profile_degraded,
        token=token,
    )


@router.get("", response_model=SessionResponse)
async def get_session(
    token: str | None = Depends(bearer_token),
    platform: Platform = Depends(get_platform),
):
    state = platform.session.state
    if not platform.session.validate_token(token):
        # Callers without the session's token only learn whether it has settled
        return SessionResponse(identity=None, profile=None, loading=state.loading, profile_degraded=False)
    return _to_response(state)


@router.post("/signup", response_model=SessionResponse, status_code=201)
async def signup(req: SignupRequest, platform: Platform = Depends(get_platform)):
    errors = validate_signup_form(req.name, req.email, req.phone, req.password, req.confirm_password)
    if errors:
        raise HTTPException(status_code=422, detail={"message": f"Please fix: {', '.join(errors)}", "errors": errors})

    result = await platform.session.sign_up(req.email.strip(), req.password, req.name.strip(), req.phone.strip())
    if not result.success:
        raise HTTPException(status_code=400, detail=result.message)
    return _to_response(platform.session.state, platform.session.issue_token())


@router.post("/login", response_model=SessionResponse)
async def login(req: LoginRequest, platform: Platform = Depends(get_platform)):
    errors = validate_login_form(req.email, req.password)
    if errors:
        raise HTTPException(status_code=422, detail={"message": "Invalid login details", "errors": errors})

    result = await platform.session.sign_in(req.email, req.password)
    if not result.success:
        raise HTTPException(status_code=401, detail=result.message)
    return _to_response(platform.session.state, platform.session.issue_token())


@router.post("/logout", response_model=SessionResponse)
async def logout(
    token: str | None = Depends(bearer_token),
    platform: Platform = Depends(get_platform),
):
    session = platform.session
    if session.state.identity is not None and not session.validate_token(token):
        raise HTTPException(status_code=401, detail="Session token is invalid or expired")
    result = await session.sign_out()
    if not result.success:
        raise HTTPException(status_code=400, detail=result.message)
    return _to_response(session.state)


@router.post("/refresh", response_model=SessionResponse, dependencies=[Depends(require_session)])
async def refresh(platform: Platform = Depends(get_platform)):
    await platform.session.refresh_profile()
    return _to_response(platform.session.state)
