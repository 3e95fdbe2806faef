"""Domain entities for AI-assisted negotiations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

NEGOTIATION_STATUS_ACTIVE = "active"
NEGOTIATION_STATUS_COMPLETED = "completed"
NEGOTIATION_STATUS_CANCELLED = "cancelled"

NEGOTIATION_STATUSES: frozenset[str] = frozenset(
    {NEGOTIATION_STATUS_ACTIVE, NEGOTIATION_STATUS_COMPLETED, NEGOTIATION_STATUS_CANCELLED}
)

NEGOTIATION_MESSAGE_TEXT = "text"
NEGOTIATION_MESSAGE_AI_SUGGESTION = "ai_suggestion"
NEGOTIATION_MESSAGE_SYSTEM = "system"


@dataclass
class Negotiation:
    """A negotiation between a creator and a set of participants."""

    id: int | None
    title: str
    created_by: int
    description: str | None = None
    status: str = NEGOTIATION_STATUS_ACTIVE
    participants: list[int] = field(default_factory=list)
    ai_assistant_enabled: bool = True
    negotiation_data: dict[str, Any] = field(default_factory=dict)
    outcome: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def involves(self, user_id: int) -> bool:
        """Return ``True`` when ``user_id`` created or participates in the negotiation."""

        return self.created_by == user_id or user_id in self.participants


@dataclass
class NegotiationMessage:
    """One entry of a negotiation conversation."""

    id: int | None
    negotiation_id: int
    sender_id: int
    message: str
    message_type: str = NEGOTIATION_MESSAGE_TEXT
    sentiment_score: float | None = None
    ai_analysis: dict[str, Any] | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class NegotiationAnalysis:
    """Structured result of analysing a negotiation message."""

    sentiment_score: float
    summary: str
    key_points: list[str] = field(default_factory=list)
    suggested_reply: str | None = None

    def as_payload(self) -> dict[str, Any]:
        return {
            "sentiment_score": self.sentiment_score,
            "summary": self.summary,
            "key_points": list(self.key_points),
            "suggested_reply": self.suggested_reply,
        }


__all__ = [
    "Negotiation",
    "NegotiationMessage",
    "NegotiationAnalysis",
    "NEGOTIATION_STATUSES",
    "NEGOTIATION_STATUS_ACTIVE",
    "NEGOTIATION_STATUS_COMPLETED",
    "NEGOTIATION_STATUS_CANCELLED",
    "NEGOTIATION_MESSAGE_TEXT",
    "NEGOTIATION_MESSAGE_AI_SUGGESTION",
    "NEGOTIATION_MESSAGE_SYSTEM",
]
