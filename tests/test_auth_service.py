"""Tests for the signup/login service."""

from unittest.mock import patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookmark_api.models import User
from bookmark_api.security import decode_access_token, verify_password
from bookmark_api.services import EmailTakenError, InvalidCredentialsError, auth_service
from tests.factories import DEFAULT_PASSWORD, UserFactory


@pytest.mark.asyncio
async def test_signup_creates_user_with_hashed_password(db: AsyncSession):
    token = await auth_service.signup(db, "new@example.com", "s3cret")
    await db.commit()

    user = (await db.execute(select(User).where(User.email == "new@example.com"))).scalar_one()
    assert user.hashed_password != "s3cret"
    assert verify_password("s3cret", user.hashed_password)
    assert decode_access_token(token) == user.id


@pytest.mark.asyncio
async def test_signup_twice_with_same_email_conflicts(db: AsyncSession):
    await auth_service.signup(db, "dup@example.com", "first")
    await db.commit()

    with pytest.raises(EmailTakenError):
        await auth_service.signup(db, "dup@example.com", "second")

    count = await db.scalar(select(func.count(User.id)).where(User.email == "dup@example.com"))
    assert count == 1


@pytest.mark.asyncio
async def test_signup_email_is_case_sensitive_as_stored(db: AsyncSession):
    await auth_service.signup(db, "case@example.com", "pw")
    await db.commit()

    await auth_service.signup(db, "Case@example.com", "pw")
    await db.commit()

    count = await db.scalar(select(func.count(User.id)))
    assert count == 2


@pytest.mark.asyncio
async def test_login_returns_token_for_valid_credentials(db: AsyncSession):
    user = await UserFactory.create_async(db, email="login@example.com")
    await db.commit()

    token = await auth_service.login(db, "login@example.com", DEFAULT_PASSWORD)

    assert decode_access_token(token) == user.id


@pytest.mark.asyncio
async def test_login_wrong_password(db: AsyncSession):
    await UserFactory.create_async(db, email="login@example.com")
    await db.commit()

    with pytest.raises(InvalidCredentialsError) as exc_info:
        await auth_service.login(db, "login@example.com", "not-the-password")
    assert str(exc_info.value) == "Credentials incorrect"


@pytest.mark.asyncio
async def test_login_unknown_email_looks_like_wrong_password(db: AsyncSession):
    with pytest.raises(InvalidCredentialsError) as exc_info:
        await auth_service.login(db, "ghost@example.com", DEFAULT_PASSWORD)
    assert str(exc_info.value) == "Credentials incorrect"


@pytest.mark.asyncio
async def test_duplicate_signup_is_logged_without_credentials(db: AsyncSession):
    """
    GIVEN an email that is already registered
    WHEN a second signup hits the unique constraint
    THEN the rejection is logged at info level with the error type,
         and neither the email nor the password digest appears in the log
    """
    await auth_service.signup(db, "dup@example.com", "first")
    await db.commit()

    with patch("bookmark_api.services.auth_service.logger") as mock_logger:
        with pytest.raises(EmailTakenError):
            await auth_service.signup(db, "dup@example.com", "second")

    mock_logger.info.assert_called_once()
    args, kwargs = mock_logger.info.call_args
    assert args == ("Signup rejected: email taken",)
    assert kwargs["error_type"] == "IntegrityError"
    assert "exc_info" not in kwargs
    assert "dup@example.com" not in kwargs["error"]
    assert "$2" not in kwargs["error"]
