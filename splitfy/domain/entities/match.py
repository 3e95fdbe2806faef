"""Domain entities for user recommendations and matches."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .user import User

MATCH_STATUS_SUGGESTED = "suggested"
MATCH_STATUS_CONNECTED = "connected"
MATCH_STATUS_DISMISSED = "dismissed"

MATCH_STATUSES: frozenset[str] = frozenset(
    {MATCH_STATUS_SUGGESTED, MATCH_STATUS_CONNECTED, MATCH_STATUS_DISMISSED}
)


@dataclass(frozen=True)
class CandidateScore:
    """A recommended user together with its similarity score."""

    candidate: User
    match_score: float
    match_reason: str


@dataclass
class UserMatch:
    """A recommendation the user acted upon."""

    id: int | None
    user_id: int
    matched_user_id: int
    match_score: float | None
    match_reason: str | None
    status: str = MATCH_STATUS_SUGGESTED
    created_at: datetime | None = None
    matched_user: User | None = None


__all__ = [
    "CandidateScore",
    "UserMatch",
    "MATCH_STATUSES",
    "MATCH_STATUS_SUGGESTED",
    "MATCH_STATUS_CONNECTED",
    "MATCH_STATUS_DISMISSED",
]
