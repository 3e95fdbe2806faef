"""Domain entities for direct messaging."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .user import User

MESSAGE_TYPES: frozenset[str] = frozenset({"text", "image", "file"})


@dataclass
class Message:
    """A direct message between two users."""

    id: int | None
    sender_id: int
    receiver_id: int
    content: str
    message_type: str = "text"
    is_read: bool = False
    created_at: datetime | None = None


@dataclass
class Conversation:
    """Latest state of the exchange with one conversation partner."""

    partner: User
    latest_message: Message
    unread_count: int = 0


__all__ = ["Message", "Conversation", "MESSAGE_TYPES"]
