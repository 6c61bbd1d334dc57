"""Base schema classes."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, field_validator


class BaseResponse(BaseModel):
    """Base for ORM-backed response schemas.

    Timestamps are normalised to timezone-aware UTC; some drivers
    (SQLite) hand back naive datetimes for ``DateTime(timezone=True)``.
    """

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at", mode="before", check_fields=False)
    @classmethod
    def ensure_timezone_aware(cls, v: datetime) -> datetime:
        """Ensure datetime fields are timezone-aware."""
        if isinstance(v, datetime) and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v
