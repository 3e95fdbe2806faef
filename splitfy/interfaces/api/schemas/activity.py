"""Pydantic models for the activity sink."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ActivityCreate(BaseModel):
    """Single activity event as sent by clients."""

    model_config = ConfigDict(populate_by_name=True)

    activity_type: str = Field(
        ..., alias="activityType", min_length=1, max_length=50
    )
    activity_data: dict[str, Any] | None = Field(default=None, alias="activityData")


class ActivityBatchCreate(BaseModel):
    activities: list[ActivityCreate] = Field(..., max_length=100)


class ActivityRecorded(BaseModel):
    recorded: int


class ActivityRead(BaseModel):
    """Activity row shown to administrators."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    activity_type: str
    activity_data: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime | None = None
    user_name: str | None = None
    user_email: str | None = None


__all__ = ["ActivityCreate", "ActivityBatchCreate", "ActivityRecorded", "ActivityRead"]
