"""Use cases for persisting and delivering user notifications."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from splitfy.domain.entities import NOTIFICATION_TYPES, Notification
from splitfy.infrastructure.notifications import dispatch_notification
from splitfy.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def notify_user(
    session: Session,
    *,
    user_id: int,
    title: str,
    content: str,
    type: str = "info",
    action_url: str | None = None,
) -> Notification:
    """Store a notification for ``user_id`` and push it to open websockets."""

    if type not in NOTIFICATION_TYPES:
        raise ValueError(f"Unsupported notification type: {type}")
    saved = NotificationRepository(session).create(
        Notification(
            id=None,
            user_id=user_id,
            title=title,
            content=content,
            type=type,
            action_url=action_url,
        )
    )
    try:
        dispatch_notification(saved)
    except Exception:
        logger.warning("Realtime delivery of notification %s failed", saved.id, exc_info=True)
    return saved


def list_notifications(
    session: Session, *, user_id: int, unread_only: bool = False, limit: int = 50
) -> Sequence[Notification]:
    return NotificationRepository(session).list_for_user(
        user_id, unread_only=unread_only, limit=limit
    )


def mark_notification_read(
    session: Session, *, notification_id: int, user_id: int
) -> Notification:
    repository = NotificationRepository(session)
    notification = repository.get(notification_id)
    if notification is None:
        raise ValueError("Notification not found")
    if notification.user_id != user_id:
        raise PermissionError("The notification belongs to another user")
    return repository.mark_as_read(notification_id)


def mark_all_notifications_read(session: Session, *, user_id: int) -> int:
    return NotificationRepository(session).mark_all_as_read(user_id)


__all__ = [
    "notify_user",
    "list_notifications",
    "mark_notification_read",
    "mark_all_notifications_read",
]
