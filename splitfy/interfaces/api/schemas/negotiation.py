"""Schemas for negotiations."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

NegotiationStatus = Literal["active", "completed", "cancelled"]


class NegotiationCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    participants: list[int] = Field(default_factory=list)
    ai_assistant_enabled: bool = True
    negotiation_data: dict[str, Any] = Field(default_factory=dict)


class NegotiationUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    status: NegotiationStatus | None = None
    ai_assistant_enabled: bool | None = None
    negotiation_data: dict[str, Any] | None = None
    outcome: dict[str, Any] | None = None


class NegotiationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    status: str
    created_by: int
    participants: list[int]
    ai_assistant_enabled: bool
    negotiation_data: dict[str, Any]
    outcome: dict[str, Any] | None
    created_at: datetime | None
    updated_at: datetime | None


class NegotiationMessageCreate(BaseModel):
    message: str = Field(..., min_length=1, max_length=5000)
    message_type: Literal["text", "system"] = "text"


class NegotiationMessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    negotiation_id: int
    sender_id: int
    message: str
    message_type: str
    sentiment_score: float | None
    ai_analysis: dict[str, Any] | None
    created_at: datetime | None


__all__ = [
    "NegotiationStatus",
    "NegotiationCreate",
    "NegotiationUpdate",
    "NegotiationRead",
    "NegotiationMessageCreate",
    "NegotiationMessageRead",
]
