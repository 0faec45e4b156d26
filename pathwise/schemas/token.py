from datetime import datetime
from typing import NamedTuple, Optional
from pydantic import BaseModel

from pathwise.schemas.user import UserResponse


class TokenPayload(BaseModel):
    sub: str  # user id
    exp: int
    iat: int
    type: str
    jti: str


class IssuedSession(NamedTuple):
    token: str
    expires_at: datetime


# Pydantic models for request
class CredentialsLogin(BaseModel):
    email: str
    password: str


class GoogleLogin(BaseModel):
    id_token: Optional[str] = None
    code: Optional[str] = None
    redirect_uri: Optional[str] = None


# Pydantic models for response
class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserResponse
