from typing import Literal

from pydantic import BaseModel

from jobseeker.schemas.profile import UserProfile


class Identity(BaseModel):
    uid: str
    email: str


class AuthSuccess(BaseModel):
    success: Literal[True] = True


class AuthFailure(BaseModel):
    success: Literal[False] = False
    message: str


AuthResult = AuthSuccess | AuthFailure


class SignupRequest(BaseModel):
    email: str
    password: str
    confirm_password: str
    name: str
    phone: str


class LoginRequest(BaseModel):
    email: str
    password: str


class SessionResponse(BaseModel):
    identity: Identity | None
    profile: UserProfile | None
    loading: bool
    profile_degraded: bool
    token: str | None = None
