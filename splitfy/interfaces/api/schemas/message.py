"""Schemas for direct messages and conversations."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .user import PublicProfileRead


class MessageCreate(BaseModel):
    receiver_id: int = Field(..., ge=1)
    content: str = Field(..., min_length=1, max_length=5000)
    message_type: Literal["text", "image", "file"] = "text"


class MessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sender_id: int
    receiver_id: int
    content: str
    message_type: str
    is_read: bool
    created_at: datetime | None


class ConversationRead(BaseModel):
    partner: PublicProfileRead
    latest_message: MessageRead
    unread_count: int


class MarkedRead(BaseModel):
    updated: int


__all__ = ["MessageCreate", "MessageRead", "ConversationRead", "MarkedRead"]
