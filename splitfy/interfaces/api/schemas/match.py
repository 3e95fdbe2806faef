"""Schemas for recommendations and matches."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from .user import PublicProfileRead

MatchStatus = Literal["suggested", "connected", "dismissed"]


class RecommendationRead(BaseModel):
    user: PublicProfileRead
    match_score: float = Field(..., ge=0, le=1)
    match_reason: str


class MatchCreate(BaseModel):
    matched_user_id: int = Field(..., ge=1)
    match_score: float | None = Field(default=None, ge=0, le=1)
    match_reason: str | None = Field(default=None, max_length=500)


class MatchStatusUpdate(BaseModel):
    status: MatchStatus


class MatchRead(BaseModel):
    id: int
    user_id: int
    matched_user_id: int
    match_score: float | None
    match_reason: str | None
    status: str
    created_at: datetime | None
    matched_user: PublicProfileRead | None = None


__all__ = [
    "MatchStatus",
    "RecommendationRead",
    "MatchCreate",
    "MatchStatusUpdate",
    "MatchRead",
]
