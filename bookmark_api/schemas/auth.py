"""Pydantic schemas for authentication."""

from typing import Annotated

from pydantic import BaseModel, EmailStr, Field


class AuthRequest(BaseModel):
    """Credentials for both signup and login."""

    email: EmailStr
    password: Annotated[str, Field(min_length=1, max_length=128)]


class TokenResponse(BaseModel):
    """Bearer token issued by signup and login."""

    access_token: str
    token_type: str = "bearer"
