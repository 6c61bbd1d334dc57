"""Authentication API router."""

from fastapi import APIRouter, status

from bookmark_api.deps import DbSession
from bookmark_api.schemas import AuthRequest, TokenResponse
from bookmark_api.services import EmailTakenError, InvalidCredentialsError, auth_service
from bookmark_api.utils.exceptions import raise_conflict, raise_unauthorized

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(data: AuthRequest, db: DbSession) -> TokenResponse:
    """Register a new user with email and password."""
    try:
        access_token = await auth_service.signup(db, data.email, data.password)
    except EmailTakenError as exc:
        raise_conflict(str(exc), cause=exc)

    await db.commit()
    return TokenResponse(access_token=access_token)


@router.post("/login", response_model=TokenResponse)
async def login(data: AuthRequest, db: DbSession) -> TokenResponse:
    """Login with email and password."""
    try:
        access_token = await auth_service.login(db, data.email, data.password)
    except InvalidCredentialsError as exc:
        raise_unauthorized(str(exc), cause=exc)

    return TokenResponse(access_token=access_token)
