"""Push notifications and chat events to websocket subscribers."""

from __future__ import annotations

import asyncio
import copy
import logging
from collections.abc import Iterable
from typing import Any

from anyio import from_thread

from splitfy.domain.entities import Message, Notification

from .manager import ConnectionManager, connection_manager

logger = logging.getLogger(__name__)


class RealtimePublisher:
    """Serialize domain events and schedule their delivery."""

    def __init__(self, manager: ConnectionManager) -> None:
        self._manager = manager

    def dispatch(self, user_id: int, *, event_type: str, payload: Any) -> None:
        if not user_id:
            return
        message = {"type": event_type, "data": copy.deepcopy(payload)}
        self._schedule_send(user_id, message)

    def dispatch_many(
        self, user_ids: Iterable[int], *, event_type: str, payload: Any
    ) -> None:
        seen: set[int] = set()
        for user_id in user_ids:
            if not user_id or user_id in seen:
                continue
            seen.add(user_id)
            self.dispatch(user_id, event_type=event_type, payload=payload)

    def _schedule_send(self, user_id: int, message: dict[str, Any]) -> None:
        if not self._manager.is_connected(user_id):
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(self._manager.send_to_user, user_id, message)
            except RuntimeError:
                logger.debug(
                    "No event loop available to push %s to user %s",
                    message.get("type"),
                    user_id,
                )
        else:
            loop.create_task(self._manager.send_to_user(user_id, message))


realtime_publisher = RealtimePublisher(connection_manager)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    return {
        "id": notification.id,
        "user_id": notification.user_id,
        "title": notification.title,
        "content": notification.content,
        "type": notification.type,
        "is_read": notification.is_read,
        "action_url": notification.action_url,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


def serialize_message(message: Message) -> dict[str, Any]:
    return {
        "id": message.id,
        "sender_id": message.sender_id,
        "receiver_id": message.receiver_id,
        "content": message.content,
        "message_type": message.message_type,
        "is_read": message.is_read,
        "created_at": message.created_at.isoformat() if message.created_at else None,
    }


def dispatch_notification(notification: Notification) -> None:
    """Push ``notification`` to its recipient when they are connected."""

    realtime_publisher.dispatch(
        notification.user_id,
        event_type="notification",
        payload=serialize_notification(notification),
    )


def dispatch_message(message: Message) -> None:
    """Push a new direct message to its receiver."""

    realtime_publisher.dispatch(
        message.receiver_id, event_type="message", payload=serialize_message(message)
    )


__all__ = [
    "RealtimePublisher",
    "realtime_publisher",
    "serialize_notification",
    "serialize_message",
    "dispatch_notification",
    "dispatch_message",
]
