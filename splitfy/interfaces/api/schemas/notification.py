"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    content: str
    type: str
    is_read: bool
    action_url: str | None = None
    created_at: datetime | None = None


class NotificationsMarkedRead(BaseModel):
    updated: int


__all__ = ["NotificationRead", "NotificationsMarkedRead"]
