"""Unit tests for exception utilities."""

import pytest
from fastapi import HTTPException

from bookmark_api.utils.exceptions import raise_conflict, raise_forbidden, raise_unauthorized


class TestRaiseUnauthorized:
    def test_basic_usage(self):
        with pytest.raises(HTTPException) as exc_info:
            raise_unauthorized("Invalid credentials")
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Invalid credentials"
        assert exc_info.value.headers is None

    def test_bearer_challenge(self):
        with pytest.raises(HTTPException) as exc_info:
            raise_unauthorized("Token expired", challenge=True)
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    def test_preserves_cause(self):
        original = ValueError("bad signature")
        with pytest.raises(HTTPException) as exc_info:
            raise_unauthorized("Could not validate credentials", cause=original)
        assert exc_info.value.__cause__ is original


class TestRaiseForbidden:
    def test_basic_usage(self):
        original = PermissionError("not yours")
        with pytest.raises(HTTPException) as exc_info:
            raise_forbidden("Access denied", cause=original)
        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == "Access denied"
        assert exc_info.value.__cause__ is original


class TestRaiseConflict:
    def test_basic_usage(self):
        with pytest.raises(HTTPException) as exc_info:
            raise_conflict("Credentials taken")
        assert exc_info.value.status_code == 409
        assert exc_info.value.detail == "Credentials taken"
