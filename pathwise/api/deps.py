from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from pathwise.clients.google_client import GoogleIdentityClient
from pathwise.core.config import settings
from pathwise.core.exceptions import UnauthenticatedError
from pathwise.core.security import SessionIssuer
from pathwise.db.database import get_db
from pathwise.models.user import User
from pathwise.services.advisor_service import AdvisorService
from pathwise.services.oracle_service import Oracle
from pathwise.services.user_service import UserService

oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/auth/session", auto_error=False)


def get_session_issuer(request: Request) -> SessionIssuer:
    return request.app.state.session_issuer


def get_oracle(request: Request) -> Oracle:
    return request.app.state.oracle


def get_google_client(request: Request) -> GoogleIdentityClient:
    return request.app.state.google_client


def get_advisor_service(oracle: Oracle = Depends(get_oracle)) -> AdvisorService:
    return AdvisorService(oracle)


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    issuer: SessionIssuer = Depends(get_session_issuer),
    db: Session = Depends(get_db),
) -> User:
    """Get current user from the bearer session token."""
    if not token:
        raise UnauthenticatedError()

    user_id = issuer.validate(token)
    user = await UserService.get_user(db, user_id)
    if not user:
        raise UnauthenticatedError()
    return user
