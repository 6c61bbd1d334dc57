"""Authentication guard resolving the bearer token to a live user."""

import structlog
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookmark_api.database import get_db
from bookmark_api.logger import get_logger
from bookmark_api.models import User
from bookmark_api.security import TokenExpiredError, TokenError, decode_access_token
from bookmark_api.utils.exceptions import raise_unauthorized

logger = get_logger(__name__)

# Missing or non-Bearer Authorization header -> 401 before any handler runs
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the current user from the bearer token.

    The token's subject is looked up again on every request; a token
    for a user that no longer exists is rejected rather than trusted.
    """
    try:
        user_id = decode_access_token(token)
    except TokenExpiredError as exc:
        raise_unauthorized("Token expired", challenge=True, cause=exc)
    except TokenError as exc:
        raise_unauthorized("Could not validate credentials", challenge=True, cause=exc)

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        logger.warning("Token subject no longer exists", user_id=user_id)
        raise_unauthorized("User not found", challenge=True)

    structlog.contextvars.bind_contextvars(user_id=user.id)
    return user


async def get_current_user_id(user: User = Depends(get_current_user)) -> int:
    """Just the id of the authenticated user."""
    return user.id
