"""Use cases for acting on recommendations."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from splitfy.domain.entities import (
    MATCH_STATUS_CONNECTED,
    MATCH_STATUS_SUGGESTED,
    MATCH_STATUSES,
    UserMatch,
)
from splitfy.infrastructure.repositories import MatchRepository, UserRepository

from .notifications import notify_user


def create_match(
    session: Session,
    *,
    user_id: int,
    matched_user_id: int,
    match_score: float | None = None,
    match_reason: str | None = None,
) -> UserMatch:
    """Persist a suggested match, returning the existing one for a known pair."""

    if user_id == matched_user_id:
        raise ValueError("Users cannot match with themselves")
    if match_score is not None and not 0 <= match_score <= 1:
        raise ValueError("match_score must be between 0 and 1")
    if UserRepository(session).get(matched_user_id) is None:
        raise ValueError("Matched user not found")

    repository = MatchRepository(session)
    existing = repository.get_by_pair(user_id, matched_user_id)
    if existing is not None:
        return existing
    return repository.create(
        UserMatch(
            id=None,
            user_id=user_id,
            matched_user_id=matched_user_id,
            match_score=match_score,
            match_reason=match_reason,
            status=MATCH_STATUS_SUGGESTED,
        )
    )


def list_matches(
    session: Session, *, user_id: int, status: str | None = None
) -> Sequence[UserMatch]:
    if status is not None and status not in MATCH_STATUSES:
        raise ValueError(f"Unsupported match status: {status}")
    return MatchRepository(session).list_for_user(user_id, status=status)


def update_match_status(
    session: Session, *, match_id: int, user_id: int, status: str
) -> UserMatch:
    if status not in MATCH_STATUSES:
        raise ValueError(f"Unsupported match status: {status}")

    repository = MatchRepository(session)
    match = repository.get(match_id)
    if match is None:
        raise ValueError("Match not found")
    if match.user_id != user_id:
        raise PermissionError("Only the owner can update this match")
    if match.status == status:
        return match

    updated = repository.update_status(match_id, status)
    if status == MATCH_STATUS_CONNECTED:
        requester = UserRepository(session).get(user_id)
        name = requester.display_name if requester else "Someone"
        notify_user(
            session,
            user_id=updated.matched_user_id,
            title="New connection",
            content=f"{name} wants to connect with you.",
            type="success",
            action_url=f"/profile/{user_id}",
        )
    return updated


__all__ = ["create_match", "list_matches", "update_match_status"]
