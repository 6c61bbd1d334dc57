"""Pydantic schemas for users."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, EmailStr, Field, field_validator

from bookmark_api.schemas.base import BaseResponse


class UserUpdate(BaseModel):
    """Schema for self-service profile edits. Unset fields are left alone."""

    email: EmailStr | None = None
    first_name: Annotated[str | None, Field(max_length=255)] = None
    last_name: Annotated[str | None, Field(max_length=255)] = None

    @field_validator("email")
    @classmethod
    def reject_null_email(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("email may be omitted but not set to null")
        return v


class UserResponse(BaseResponse):
    """Public view of a user; the password digest is never exposed."""

    id: int
    email: str
    first_name: str | None = None
    last_name: str | None = None
    created_at: datetime
    updated_at: datetime


class MeResponse(BaseModel):
    """Envelope returned by ``GET /users/me``."""

    user: UserResponse
