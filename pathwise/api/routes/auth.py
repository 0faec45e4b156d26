from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pathwise.api.deps import get_google_client, get_session_issuer
from pathwise.clients.google_client import GoogleIdentityClient
from pathwise.core.exceptions import InvalidInputError
from pathwise.core.security import SessionIssuer
from pathwise.db.database import get_db
from pathwise.schemas.token import CredentialsLogin, GoogleLogin, TokenResponse
from pathwise.schemas.user import (
    CredentialAttempt,
    Identity,
    PasswordAttempt,
    UserCreate,
    UserResponse,
)
from pathwise.services.user_service import UserService

router = APIRouter()


async def _start_session(
    db: Session, issuer: SessionIssuer, attempt: CredentialAttempt
) -> TokenResponse:
    identity: Identity = await UserService.resolve_identity(db, attempt)
    session = issuer.issue(identity.id)
    user = await UserService.get_user(db, identity.id)
    return TokenResponse(
        access_token=session.token,
        expires_at=session.expires_at,
        user=UserResponse.model_validate(user),
    )


@router.post("/register")
async def register(
    user_in: UserCreate,
    db: Session = Depends(get_db),
) -> Any:
    """Register a new password account."""
    await UserService.register(db, user_in)
    return {"message": "Registered successfully"}


@router.post("/session", response_model=TokenResponse)
async def create_session(
    credentials: CredentialsLogin,
    db: Session = Depends(get_db),
    issuer: SessionIssuer = Depends(get_session_issuer),
) -> Any:
    """Sign in with email and password."""
    attempt = PasswordAttempt(email=credentials.email, password=credentials.password)
    return await _start_session(db, issuer, attempt)


@router.post("/session/google", response_model=TokenResponse)
async def create_google_session(
    login: GoogleLogin,
    db: Session = Depends(get_db),
    issuer: SessionIssuer = Depends(get_session_issuer),
    google: GoogleIdentityClient = Depends(get_google_client),
) -> Any:
    """Sign in with a Google ID token or authorization code.

    A first sign-in for an unseen email creates a Google-only account.
    """
    id_token = login.id_token
    if not id_token:
        if not login.code or not login.redirect_uri:
            raise InvalidInputError("id_token or code and redirect_uri required")
        id_token = await google.exchange_code(login.code, login.redirect_uri)

    attempt = await google.verify_id_token(id_token)
    return await _start_session(db, issuer, attempt)
