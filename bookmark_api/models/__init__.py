"""SQLAlchemy models package."""

from bookmark_api.models.base import TimestampMixin
from bookmark_api.models.bookmark import Bookmark
from bookmark_api.models.user import User

__all__ = [
    "Bookmark",
    "TimestampMixin",
    "User",
]
