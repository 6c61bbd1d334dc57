"""Common FastAPI dependencies for consistent type annotations.

Usage:
    from bookmark_api.deps import CurrentUser, DbSession

    async def my_endpoint(db: DbSession, user: CurrentUser):
        # db is AsyncSession with get_db dependency injected
        # user is the User resolved from the bearer token
        ...
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookmark_api.auth import get_current_user, get_current_user_id
from bookmark_api.database import get_db
from bookmark_api.models import User

DbSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_user)]
CurrentUserId = Annotated[int, Depends(get_current_user_id)]

__all__ = ["CurrentUser", "CurrentUserId", "DbSession"]
