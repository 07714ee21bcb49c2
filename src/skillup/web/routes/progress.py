"""User progress and subscription endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from skillup.db.users_repository import UserRecord, update_progress, update_subscription
from skillup.web.deps import get_current_user
from skillup.web.schemas import (
    ProgressUpdateRequest,
    SubscriptionRequest,
    UserResponse,
    UserUpdateResponse,
)

router = APIRouter(prefix="/api/user", tags=["user"])


def _updated(user: UserRecord | None) -> UserUpdateResponse:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return UserUpdateResponse(success=True, user=UserResponse(**user.to_public_dict()))


@router.post("/update-progress", response_model=UserUpdateResponse)
async def set_progress(
    data: ProgressUpdateRequest,
    user: UserRecord = Depends(get_current_user),
) -> UserUpdateResponse:
    """Set one progress counter to an absolute value."""
    return _updated(update_progress(user.id, data.type, data.value))


@router.post("/subscription", response_model=UserUpdateResponse)
async def set_subscription(
    data: SubscriptionRequest,
    user: UserRecord = Depends(get_current_user),
) -> UserUpdateResponse:
    """Change the authenticated user's subscription tier."""
    return _updated(update_subscription(user.id, data.tier))
