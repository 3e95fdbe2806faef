"""Persistence helpers for negotiations and their messages."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy import or_
from sqlalchemy.orm import Session

from splitfy.domain.entities import Negotiation, NegotiationMessage
from splitfy.infrastructure.models import (
    NegotiationMessageModel,
    NegotiationModel,
    UserModel,
    negotiation_participant_table,
)
from splitfy.utils import ensure_app_timezone


class NegotiationRepository:
    """Provide CRUD operations for negotiations."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, negotiation_id: int) -> Negotiation | None:
        model = self.session.get(NegotiationModel, negotiation_id)
        return self._to_entity(model) if model else None

    def list_for_user(self, user_id: int) -> Sequence[Negotiation]:
        participant_ids = (
            self.session.query(negotiation_participant_table.c.negotiation_id)
            .filter(negotiation_participant_table.c.user_id == user_id)
            .scalar_subquery()
        )
        query = (
            self.session.query(NegotiationModel)
            .filter(
                or_(
                    NegotiationModel.created_by == user_id,
                    NegotiationModel.id.in_(participant_ids),
                )
            )
            .order_by(NegotiationModel.created_at.desc(), NegotiationModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, negotiation: Negotiation) -> Negotiation:
        model = NegotiationModel()
        self._apply_entity_to_model(model, negotiation)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, negotiation: Negotiation) -> Negotiation:
        model = (
            self.session.get(NegotiationModel, negotiation.id)
            if negotiation.id is not None
            else None
        )
        if model is None:
            msg = f"Negotiation with id {negotiation.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, negotiation)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_messages(self, negotiation_id: int) -> Sequence[NegotiationMessage]:
        query = (
            self.session.query(NegotiationMessageModel)
            .filter(NegotiationMessageModel.negotiation_id == negotiation_id)
            .order_by(NegotiationMessageModel.created_at, NegotiationMessageModel.id)
        )
        return [self._message_to_entity(model) for model in query.all()]

    def get_message(self, message_id: int) -> NegotiationMessage | None:
        model = self.session.get(NegotiationMessageModel, message_id)
        return self._message_to_entity(model) if model else None

    def add_message(self, message: NegotiationMessage) -> NegotiationMessage:
        model = NegotiationMessageModel(
            negotiation_id=message.negotiation_id,
            sender_id=message.sender_id,
            message=message.message,
            message_type=message.message_type,
            sentiment_score=_to_decimal(message.sentiment_score),
            ai_analysis=message.ai_analysis,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._message_to_entity(model)

    def save_analysis(
        self, message_id: int, *, sentiment_score: float, ai_analysis: dict
    ) -> NegotiationMessage:
        model = self.session.get(NegotiationMessageModel, message_id)
        if model is None:
            msg = f"Negotiation message with id {message_id} not found"
            raise ValueError(msg)
        model.sentiment_score = _to_decimal(sentiment_score)
        model.ai_analysis = ai_analysis
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._message_to_entity(model)

    def _apply_entity_to_model(
        self, model: NegotiationModel, negotiation: Negotiation
    ) -> None:
        model.title = negotiation.title
        model.description = negotiation.description
        model.status = negotiation.status
        model.created_by = negotiation.created_by
        model.ai_assistant_enabled = negotiation.ai_assistant_enabled
        model.negotiation_data = dict(negotiation.negotiation_data or {})
        model.outcome = negotiation.outcome
        participant_ids = sorted(set(negotiation.participants))
        if participant_ids:
            model.participants = (
                self.session.query(UserModel)
                .filter(UserModel.id.in_(participant_ids))
                .all()
            )
        else:
            model.participants = []

    @staticmethod
    def _to_entity(model: NegotiationModel) -> Negotiation:
        return Negotiation(
            id=model.id,
            title=model.title,
            description=model.description,
            status=model.status,
            created_by=model.created_by,
            participants=sorted(user.id for user in model.participants),
            ai_assistant_enabled=model.ai_assistant_enabled,
            negotiation_data=dict(model.negotiation_data or {}),
            outcome=model.outcome,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )

    @staticmethod
    def _message_to_entity(model: NegotiationMessageModel) -> NegotiationMessage:
        return NegotiationMessage(
            id=model.id,
            negotiation_id=model.negotiation_id,
            sender_id=model.sender_id,
            message=model.message,
            message_type=model.message_type,
            sentiment_score=float(model.sentiment_score)
            if model.sentiment_score is not None
            else None,
            ai_analysis=model.ai_analysis,
            created_at=ensure_app_timezone(model.created_at),
        )


def _to_decimal(value: float | None) -> Decimal | None:
    if value is None:
        return None
    return Decimal(str(value)).quantize(Decimal("0.01"))


__all__ = ["NegotiationRepository"]
