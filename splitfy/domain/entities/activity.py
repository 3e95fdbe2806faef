"""Domain entities describing tracked user activity."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

IMMEDIATE_ACTIVITY_TYPES: frozenset[str] = frozenset({"login", "signup", "error", "payment"})
BATCH_UNLOAD_ACTIVITY_TYPE = "batch_unload"

ACTIVITY_LOGIN = "login"
ACTIVITY_MESSAGE_SENT = "message_sent"
ACTIVITY_CONTRACT_SIGNED = "contract_signed"


@dataclass(frozen=True)
class ActivityEvent:
    """A discrete named event waiting to be delivered to the activity sink."""

    activity_type: str
    activity_data: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.activity_type, str) or not self.activity_type.strip():
            raise ValueError("activity_type must be a non-empty string")

    @property
    def is_immediate(self) -> bool:
        return self.activity_type in IMMEDIATE_ACTIVITY_TYPES

    def to_payload(self) -> dict[str, Any]:
        """Return the wire representation used by the activity endpoints."""

        payload: dict[str, Any] = {"activityType": self.activity_type}
        if self.activity_data is not None:
            payload["activityData"] = dict(self.activity_data)
        return payload


@dataclass
class UserActivity:
    """An activity event persisted for a given user."""

    id: int | None
    user_id: int
    activity_type: str
    activity_data: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime | None = None
    user_name: str | None = None
    user_email: str | None = None


@dataclass
class ProfileView:
    """A view of ``profile_id``'s public profile."""

    id: int | None
    profile_id: int
    viewer_id: int | None = None
    viewed_at: datetime | None = None


__all__ = [
    "ActivityEvent",
    "UserActivity",
    "ProfileView",
    "IMMEDIATE_ACTIVITY_TYPES",
    "BATCH_UNLOAD_ACTIVITY_TYPE",
    "ACTIVITY_LOGIN",
    "ACTIVITY_MESSAGE_SENT",
    "ACTIVITY_CONTRACT_SIGNED",
]
