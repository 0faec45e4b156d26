from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pathwise.api.deps import get_current_user
from pathwise.core.exceptions import NotFoundError
from pathwise.db.database import get_db
from pathwise.models.user import User
from pathwise.schemas.profile import ProfileResponse, ProfileSaveResponse, ProfileUpdate
from pathwise.schemas.user import UserResponse
from pathwise.services.profile_service import ProfileService

router = APIRouter()


def _check_owner(current_user: User, user_id: str) -> None:
    # Other users' profiles are reported as missing rather than forbidden
    if user_id != current_user.id:
        raise NotFoundError("User not found")


@router.get("", response_model=ProfileResponse)
async def read_profile(
    user_id: Optional[str] = Query(None, alias="userId"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Any:
    """Get the signed-in user's profile with skills, career paths and resume."""
    if user_id is not None:
        _check_owner(current_user, user_id)
    user = await ProfileService.get_profile(db, current_user.id)
    return ProfileResponse.model_validate(user)


@router.post("", response_model=ProfileSaveResponse)
async def save_profile(
    profile_in: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Any:
    """Replace the signed-in user's interests, skills, career paths and resume."""
    _check_owner(current_user, profile_in.user_id)
    user = await ProfileService.apply_profile_update(db, profile_in.user_id, profile_in)
    return ProfileSaveResponse(success=True, user=UserResponse.model_validate(user))
