"""User profile API router."""

from fastapi import APIRouter, Depends

from bookmark_api.auth import get_current_user
from bookmark_api.deps import CurrentUser, DbSession
from bookmark_api.schemas import MeResponse, UserResponse, UserUpdate
from bookmark_api.services import EmailTakenError, user_service
from bookmark_api.utils.exceptions import raise_conflict

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(get_current_user)])


@router.get("/me", response_model=MeResponse)
async def get_me(user: CurrentUser) -> MeResponse:
    """Get current authenticated user."""
    return MeResponse(user=UserResponse.model_validate(user))


@router.patch("", response_model=UserResponse)
async def edit_user(user_data: UserUpdate, user: CurrentUser, db: DbSession) -> UserResponse:
    """Update the current user's email and names."""
    try:
        user = await user_service.update_user(db, user, user_data)
    except EmailTakenError as exc:
        raise_conflict(str(exc), cause=exc)

    await db.commit()
    return UserResponse.model_validate(user)
