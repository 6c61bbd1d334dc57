"""Pydantic schemas for bookmarks."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from bookmark_api.schemas.base import BaseResponse


class BookmarkCreate(BaseModel):
    """Schema for creating a bookmark."""

    title: Annotated[str, Field(min_length=1, max_length=255)]
    link: Annotated[str, Field(min_length=1)]
    description: str | None = None


class BookmarkUpdate(BaseModel):
    """Schema for a partial bookmark edit. Only fields sent by the client are applied."""

    title: Annotated[str | None, Field(min_length=1, max_length=255)] = None
    link: Annotated[str | None, Field(min_length=1)] = None
    description: str | None = None

    @field_validator("title", "link")
    @classmethod
    def reject_explicit_null(cls, v: str | None) -> str:
        """Title and link may be omitted but not cleared."""
        if v is None:
            raise ValueError("field may be omitted but not set to null")
        return v


class BookmarkResponse(BaseResponse):
    """Schema for bookmark response."""

    id: int
    user_id: int
    title: str
    link: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime
