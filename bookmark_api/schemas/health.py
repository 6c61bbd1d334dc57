"""Pydantic schemas for the health endpoint."""

from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    checks: dict[str, bool]
    version: str
