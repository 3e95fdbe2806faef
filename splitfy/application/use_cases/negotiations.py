"""Use cases for AI assisted negotiations."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import Any, Protocol

from sqlalchemy.orm import Session

from splitfy.domain.entities import (
    NEGOTIATION_MESSAGE_AI_SUGGESTION,
    NEGOTIATION_MESSAGE_TEXT,
    NEGOTIATION_STATUS_ACTIVE,
    NEGOTIATION_STATUSES,
    Negotiation,
    NegotiationAnalysis,
    NegotiationMessage,
)
from splitfy.infrastructure.database import SessionLocal
from splitfy.infrastructure.repositories import NegotiationRepository, UserRepository

from .notifications import notify_user

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 200
_USER_MESSAGE_TYPES = frozenset({NEGOTIATION_MESSAGE_TEXT, "system"})


class NegotiationAnalyzer(Protocol):
    def analyze(
        self,
        message: str,
        *,
        negotiation_title: str,
        history: Sequence[NegotiationMessage] = (),
    ) -> NegotiationAnalysis: ...


def _get_accessible(
    repository: NegotiationRepository, negotiation_id: int, user_id: int
) -> Negotiation:
    negotiation = repository.get(negotiation_id)
    if negotiation is None:
        raise ValueError("Negotiation not found")
    if not negotiation.involves(user_id):
        raise PermissionError("You are not part of this negotiation")
    return negotiation


def list_negotiations(session: Session, *, user_id: int) -> Sequence[Negotiation]:
    return NegotiationRepository(session).list_for_user(user_id)


def get_negotiation(session: Session, *, negotiation_id: int, user_id: int) -> Negotiation:
    return _get_accessible(NegotiationRepository(session), negotiation_id, user_id)


def create_negotiation(
    session: Session,
    *,
    created_by: int,
    title: str,
    description: str | None = None,
    participants: Sequence[int] = (),
    ai_assistant_enabled: bool = True,
    negotiation_data: dict[str, Any] | None = None,
) -> Negotiation:
    """Open a negotiation and notify each participant."""

    title = (title or "").strip()
    if not title:
        raise ValueError("The negotiation title is required")
    if len(title) > MAX_TITLE_LENGTH:
        raise ValueError(f"The title cannot exceed {MAX_TITLE_LENGTH} characters")

    participant_ids = sorted({int(pid) for pid in participants} - {created_by})
    users = UserRepository(session).get_map_by_ids(participant_ids)
    missing = [pid for pid in participant_ids if pid not in users]
    if missing:
        raise ValueError(f"Participants not found: {', '.join(map(str, missing))}")

    negotiation = NegotiationRepository(session).create(
        Negotiation(
            id=None,
            title=title,
            description=description,
            created_by=created_by,
            status=NEGOTIATION_STATUS_ACTIVE,
            participants=participant_ids,
            ai_assistant_enabled=ai_assistant_enabled,
            negotiation_data=dict(negotiation_data or {}),
        )
    )
    for participant_id in participant_ids:
        notify_user(
            session,
            user_id=participant_id,
            title="New negotiation",
            content=f"You were invited to the negotiation \"{negotiation.title}\".",
            action_url=f"/negotiations/{negotiation.id}",
        )
    return negotiation


def update_negotiation(
    session: Session,
    *,
    negotiation_id: int,
    user_id: int,
    title: str | None = None,
    description: str | None = None,
    status: str | None = None,
    ai_assistant_enabled: bool | None = None,
    negotiation_data: dict[str, Any] | None = None,
    outcome: dict[str, Any] | None = None,
) -> Negotiation:
    repository = NegotiationRepository(session)
    negotiation = repository.get(negotiation_id)
    if negotiation is None:
        raise ValueError("Negotiation not found")
    if negotiation.created_by != user_id:
        raise PermissionError("Only the creator can update the negotiation")
    if status is not None and status not in NEGOTIATION_STATUSES:
        raise ValueError(f"Unsupported negotiation status: {status}")
    if title is not None and not title.strip():
        raise ValueError("The negotiation title is required")

    updated = replace(
        negotiation,
        title=title.strip() if title is not None else negotiation.title,
        description=description if description is not None else negotiation.description,
        status=status or negotiation.status,
        ai_assistant_enabled=ai_assistant_enabled
        if ai_assistant_enabled is not None
        else negotiation.ai_assistant_enabled,
        negotiation_data=negotiation_data
        if negotiation_data is not None
        else negotiation.negotiation_data,
        outcome=outcome if outcome is not None else negotiation.outcome,
    )
    return repository.update(updated)


def list_negotiation_messages(
    session: Session, *, negotiation_id: int, user_id: int
) -> Sequence[NegotiationMessage]:
    repository = NegotiationRepository(session)
    _get_accessible(repository, negotiation_id, user_id)
    return repository.list_messages(negotiation_id)


def post_negotiation_message(
    session: Session,
    *,
    negotiation_id: int,
    sender_id: int,
    message: str,
    message_type: str = NEGOTIATION_MESSAGE_TEXT,
) -> tuple[NegotiationMessage, bool]:
    """Store a message and report whether it should be analysed."""

    repository = NegotiationRepository(session)
    negotiation = _get_accessible(repository, negotiation_id, sender_id)
    if negotiation.status != NEGOTIATION_STATUS_ACTIVE:
        raise ValueError("The negotiation is no longer active")
    message = (message or "").strip()
    if not message:
        raise ValueError("The message cannot be empty")
    if message_type not in _USER_MESSAGE_TYPES:
        raise ValueError(f"Unsupported message type: {message_type}")

    saved = repository.add_message(
        NegotiationMessage(
            id=None,
            negotiation_id=negotiation_id,
            sender_id=sender_id,
            message=message,
            message_type=message_type,
        )
    )
    should_analyze = (
        negotiation.ai_assistant_enabled and message_type == NEGOTIATION_MESSAGE_TEXT
    )
    return saved, should_analyze


def analyze_negotiation_message(
    message_id: int,
    *,
    analyzer: NegotiationAnalyzer,
    session_factory: Callable[[], Session] = SessionLocal,
) -> NegotiationMessage | None:
    """Analyse a stored message in the background.

    Runs after the response was sent, so it opens its own session and never
    raises: failures are logged and the message is left without analysis.
    """

    session = session_factory()
    try:
        repository = NegotiationRepository(session)
        message = repository.get_message(message_id)
        if message is None:
            logger.warning("Negotiation message %s vanished before analysis", message_id)
            return None
        negotiation = repository.get(message.negotiation_id)
        if negotiation is None:
            return None
        history = [
            entry
            for entry in repository.list_messages(negotiation.id)
            if entry.id != message.id
        ]
        analysis = analyzer.analyze(
            message.message, negotiation_title=negotiation.title, history=history
        )
        updated = repository.save_analysis(
            message.id,
            sentiment_score=analysis.sentiment_score,
            ai_analysis=analysis.as_payload(),
        )
        if analysis.suggested_reply:
            repository.add_message(
                NegotiationMessage(
                    id=None,
                    negotiation_id=negotiation.id,
                    sender_id=message.sender_id,
                    message=analysis.suggested_reply,
                    message_type=NEGOTIATION_MESSAGE_AI_SUGGESTION,
                    ai_analysis={"source_message_id": message.id},
                )
            )
        return updated
    except Exception:
        session.rollback()
        logger.exception("Analysis of negotiation message %s failed", message_id)
        return None
    finally:
        session.close()


__all__ = [
    "NegotiationAnalyzer",
    "list_negotiations",
    "get_negotiation",
    "create_negotiation",
    "update_negotiation",
    "list_negotiation_messages",
    "post_negotiation_message",
    "analyze_negotiation_message",
]
