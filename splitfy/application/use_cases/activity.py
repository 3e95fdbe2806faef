"""Use cases backing the activity sink."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy.orm import Session

from splitfy.domain.entities import BATCH_UNLOAD_ACTIVITY_TYPE, UserActivity
from splitfy.infrastructure.repositories import ActivityRepository

logger = logging.getLogger(__name__)

MAX_ACTIVITY_TYPE_LENGTH = 50
MAX_BATCH_SIZE = 100


def _validate_activity_type(activity_type: str) -> str:
    value = (activity_type or "").strip()
    if not value:
        raise ValueError("activityType is required")
    if len(value) > MAX_ACTIVITY_TYPE_LENGTH:
        raise ValueError(
            f"activityType cannot exceed {MAX_ACTIVITY_TYPE_LENGTH} characters"
        )
    return value


def _unpack_unload(activity_data: Mapping[str, Any] | None) -> list[tuple[str, Any]]:
    activities = (activity_data or {}).get("activities")
    if not isinstance(activities, list):
        raise ValueError("batch_unload activityData must contain an activities list")
    unpacked: list[tuple[str, Any]] = []
    for item in activities:
        if not isinstance(item, Mapping):
            raise ValueError("Every unloaded activity must be an object")
        data = item.get("activityData")
        if data is not None and not isinstance(data, Mapping):
            raise ValueError("activityData must be an object")
        unpacked.append((str(item.get("activityType") or ""), data))
    return unpacked


def record_activity(
    session: Session,
    *,
    user_id: int,
    activity_type: str,
    activity_data: Mapping[str, Any] | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> int:
    """Persist one activity and return the number of stored rows.

    A ``batch_unload`` activity carries the events a client flushed while
    shutting down; those are stored as individual rows instead.
    """

    activity_type = _validate_activity_type(activity_type)
    if activity_type == BATCH_UNLOAD_ACTIVITY_TYPE:
        return record_activity_batch(
            session,
            user_id=user_id,
            activities=_unpack_unload(activity_data),
            ip_address=ip_address,
            user_agent=user_agent,
        )

    ActivityRepository(session).create(
        UserActivity(
            id=None,
            user_id=user_id,
            activity_type=activity_type,
            activity_data=dict(activity_data) if activity_data is not None else None,
            ip_address=ip_address,
            user_agent=user_agent,
        )
    )
    return 1


def record_activity_batch(
    session: Session,
    *,
    user_id: int,
    activities: Sequence[tuple[str, Mapping[str, Any] | None]],
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> int:
    """Store ``activities`` with a single insert and return how many were stored."""

    if len(activities) > MAX_BATCH_SIZE:
        raise ValueError(f"A batch cannot contain more than {MAX_BATCH_SIZE} activities")
    if not activities:
        return 0

    rows = [
        UserActivity(
            id=None,
            user_id=user_id,
            activity_type=_validate_activity_type(activity_type),
            activity_data=dict(activity_data) if activity_data is not None else None,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        for activity_type, activity_data in activities
    ]
    stored = ActivityRepository(session).bulk_create(rows)
    logger.debug("Stored %d activities for user %s", stored, user_id)
    return stored


def list_recent_activity(session: Session, *, limit: int = 50) -> Sequence[UserActivity]:
    return ActivityRepository(session).list_recent(limit=limit)


__all__ = [
    "record_activity",
    "record_activity_batch",
    "list_recent_activity",
    "MAX_ACTIVITY_TYPE_LENGTH",
    "MAX_BATCH_SIZE",
]
