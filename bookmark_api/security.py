"""Security utilities for JWT and password hashing.

Access tokens are stateless HS256 JWTs carrying ``sub`` (the user id),
``iat`` and ``exp``. There is no server-side session or revocation list:
a token stays valid until it expires, and rotating ``SECRET_KEY``
invalidates every outstanding token at once.
"""

import base64
import hashlib
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from bookmark_api.config import settings
from bookmark_api.logger import get_logger

logger = get_logger(__name__)


class TokenError(Exception):
    """Base exception for access token verification failures."""


class TokenExpiredError(TokenError):
    """Token signature is valid but its expiry has passed."""


class InvalidTokenError(TokenError):
    """Token is malformed, has a bad signature or lacks a usable subject."""


def _bcrypt_input(password: str) -> bytes:
    """SHA-256 digest of the password, base64-encoded (44 bytes).

    bcrypt refuses input over 72 bytes, while a valid password may be up to
    128 characters of arbitrary UTF-8.
    """
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(_bcrypt_input(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    A malformed stored hash raises ``ValueError``: that is a server-side
    data problem, not a credential mismatch.
    """
    return bcrypt.checkpw(_bcrypt_input(plain_password), hashed_password.encode("utf-8"))


def create_access_token(
    user_id: int,
    expires_delta: timedelta | None = None,
    now: datetime | None = None,
) -> str:
    """Create a new JWT access token for ``user_id``."""
    issued_at = now or datetime.now(UTC)
    if expires_delta is None:
        expires_delta = settings.access_token_expires

    to_encode = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, now: datetime | None = None) -> int:
    """Verify an access token and return the user id it was issued for.

    Raises:
        TokenExpiredError: signature checks out but ``now`` is past ``exp``
        InvalidTokenError: bad signature, bad format or missing/invalid claims
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": False, "verify_iat": False, "require": ["sub", "exp"]},
        )
    except jwt.PyJWTError as exc:
        logger.warning(
            "JWT decode failed",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        raise InvalidTokenError("Invalid token") from exc

    current = now or datetime.now(UTC)
    try:
        expires_at = float(payload["exp"])
    except (TypeError, ValueError) as exc:
        raise InvalidTokenError("Invalid expiry claim") from exc
    if current.timestamp() > expires_at:
        logger.debug("JWT token expired")
        raise TokenExpiredError("Token expired")

    try:
        return int(payload["sub"])
    except (TypeError, ValueError) as exc:
        logger.warning("JWT subject is not a user id")
        raise InvalidTokenError("Invalid subject claim") from exc
