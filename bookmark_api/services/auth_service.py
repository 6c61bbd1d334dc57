"""Signup and login."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bookmark_api.logger import get_logger, log_exception
from bookmark_api.models import User
from bookmark_api.security import create_access_token, hash_password, verify_password

logger = get_logger(__name__)

# Checked against when the email is unknown so both login failures cost one bcrypt round.
_DUMMY_HASH = hash_password("not-a-real-password")


class AuthServiceError(Exception):
    """Base exception for auth service errors."""


class EmailTakenError(AuthServiceError):
    """Another user already holds this email."""


class InvalidCredentialsError(AuthServiceError):
    """Unknown email or wrong password. Deliberately does not say which."""


async def signup(db: AsyncSession, email: str, password: str) -> str:
    """Create a user and return a fresh access token.

    Email uniqueness is enforced by the store; the unique-constraint
    violation is the only duplicate check, so concurrent signups for the
    same address cannot both succeed.
    """
    user = User(email=email, hashed_password=hash_password(password))
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        log_exception(
            logger, exc, "Signup rejected: email taken", level="info", include_traceback=False
        )
        raise EmailTakenError("Credentials taken") from exc

    logger.info("User signed up", user_id=user.id)
    return create_access_token(user.id)


async def login(db: AsyncSession, email: str, password: str) -> str:
    """Check credentials and return a fresh access token."""
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()

    if user is None:
        verify_password(password, _DUMMY_HASH)
        logger.warning("Failed login attempt")
        raise InvalidCredentialsError("Credentials incorrect")

    if not verify_password(password, user.hashed_password):
        logger.warning("Failed login attempt", user_id=user.id)
        raise InvalidCredentialsError("Credentials incorrect")

    logger.info("Successful login", user_id=user.id)
    return create_access_token(user.id)
