"""Use cases for direct messaging."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from splitfy.domain.entities import (
    ACTIVITY_MESSAGE_SENT,
    MESSAGE_TYPES,
    Conversation,
    Message,
    UserActivity,
)
from splitfy.infrastructure.notifications import dispatch_message
from splitfy.infrastructure.repositories import (
    ActivityRepository,
    MessageRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 5000
DEFAULT_CONVERSATION_LIMIT = 50


def send_message(
    session: Session,
    *,
    sender_id: int,
    receiver_id: int,
    content: str,
    message_type: str = "text",
) -> Message:
    """Store a message, track it as activity and push it to the receiver."""

    content = (content or "").strip()
    if not content:
        raise ValueError("Message content cannot be empty")
    if len(content) > MAX_MESSAGE_LENGTH:
        raise ValueError(f"Messages cannot exceed {MAX_MESSAGE_LENGTH} characters")
    if message_type not in MESSAGE_TYPES:
        raise ValueError(f"Unsupported message type: {message_type}")
    if sender_id == receiver_id:
        raise ValueError("Users cannot message themselves")
    receiver = UserRepository(session).get(receiver_id)
    if receiver is None or not receiver.is_active:
        raise ValueError("Receiver not found")

    message = MessageRepository(session).create(
        Message(
            id=None,
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            message_type=message_type,
        )
    )
    ActivityRepository(session).create(
        UserActivity(
            id=None,
            user_id=sender_id,
            activity_type=ACTIVITY_MESSAGE_SENT,
            activity_data={"receiverId": receiver_id},
        )
    )
    try:
        dispatch_message(message)
    except Exception:
        logger.warning("Realtime delivery of message %s failed", message.id, exc_info=True)
    return message


def list_conversations(session: Session, *, user_id: int) -> list[Conversation]:
    """Return one entry per partner with the latest message, newest first."""

    repository = MessageRepository(session)
    latest_by_partner: dict[int, Message] = {}
    for message in repository.list_involving(user_id):
        partner_id = (
            message.receiver_id if message.sender_id == user_id else message.sender_id
        )
        latest_by_partner.setdefault(partner_id, message)

    partners = UserRepository(session).get_map_by_ids(list(latest_by_partner))
    unread = repository.unread_counts_by_sender(user_id)
    return [
        Conversation(
            partner=partners[partner_id],
            latest_message=message,
            unread_count=unread.get(partner_id, 0),
        )
        for partner_id, message in latest_by_partner.items()
        if partner_id in partners
    ]


def get_conversation(
    session: Session,
    *,
    user_id: int,
    partner_id: int,
    limit: int = DEFAULT_CONVERSATION_LIMIT,
) -> Sequence[Message]:
    if limit < 1:
        raise ValueError("limit must be greater than zero")
    return MessageRepository(session).list_between(user_id, partner_id, limit=limit)


def mark_conversation_read(session: Session, *, user_id: int, sender_id: int) -> int:
    """Mark every unread message from ``sender_id`` to ``user_id`` as read."""

    return MessageRepository(session).mark_as_read(sender_id=sender_id, receiver_id=user_id)


__all__ = [
    "send_message",
    "list_conversations",
    "get_conversation",
    "mark_conversation_read",
    "MAX_MESSAGE_LENGTH",
]
