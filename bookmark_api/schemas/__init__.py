from bookmark_api.schemas.auth import AuthRequest, TokenResponse
from bookmark_api.schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from bookmark_api.schemas.health import HealthResponse
from bookmark_api.schemas.user import MeResponse, UserResponse, UserUpdate

__all__ = [
    "AuthRequest",
    "TokenResponse",
    "BookmarkCreate",
    "BookmarkUpdate",
    "BookmarkResponse",
    "HealthResponse",
    "MeResponse",
    "UserResponse",
    "UserUpdate",
]
