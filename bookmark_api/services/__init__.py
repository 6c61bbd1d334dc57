"""Business logic services."""

from bookmark_api.services import auth_service, bookmark_service, user_service
from bookmark_api.services.auth_service import (
    AuthServiceError,
    EmailTakenError,
    InvalidCredentialsError,
)
from bookmark_api.services.bookmark_service import (
    BookmarkAccessDeniedError,
    BookmarkNotFoundError,
    BookmarkServiceError,
)

__all__ = [
    "auth_service",
    "bookmark_service",
    "user_service",
    "AuthServiceError",
    "EmailTakenError",
    "InvalidCredentialsError",
    "BookmarkServiceError",
    "BookmarkNotFoundError",
    "BookmarkAccessDeniedError",
]
