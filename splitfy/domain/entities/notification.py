"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

NOTIFICATION_TYPES: frozenset[str] = frozenset({"info", "warning", "success", "error"})


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: int | None
    user_id: int
    title: str
    content: str
    type: str = "info"
    is_read: bool = False
    action_url: str | None = None
    created_at: datetime | None = None


__all__ = ["Notification", "NOTIFICATION_TYPES"]
