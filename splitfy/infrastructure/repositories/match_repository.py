"""Persistence helpers for user matches."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy.orm import Session

from splitfy.domain.entities import UserMatch
from splitfy.infrastructure.models import UserMatchModel
from splitfy.utils import ensure_app_timezone

from .user_repository import UserRepository


class MatchRepository:
    """Provide CRUD operations for :class:`UserMatch` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, match_id: int) -> UserMatch | None:
        model = self.session.get(UserMatchModel, match_id)
        return self._to_entity(model) if model else None

    def get_by_pair(self, user_id: int, matched_user_id: int) -> UserMatch | None:
        model = (
            self.session.query(UserMatchModel)
            .filter(UserMatchModel.user_id == user_id)
            .filter(UserMatchModel.matched_user_id == matched_user_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def list_for_user(self, user_id: int, *, status: str | None = None) -> Sequence[UserMatch]:
        query = self.session.query(UserMatchModel).filter(UserMatchModel.user_id == user_id)
        if status is not None:
            query = query.filter(UserMatchModel.status == status)
        query = query.order_by(UserMatchModel.created_at.desc(), UserMatchModel.id.desc())
        return [self._to_entity(model) for model in query.all()]

    def create(self, match: UserMatch) -> UserMatch:
        model = UserMatchModel(
            user_id=match.user_id,
            matched_user_id=match.matched_user_id,
            match_score=_to_decimal(match.match_score),
            match_reason=match.match_reason,
            status=match.status,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_status(self, match_id: int, status: str) -> UserMatch:
        model = self.session.get(UserMatchModel, match_id)
        if model is None:
            msg = f"Match with id {match_id} not found"
            raise ValueError(msg)
        model.status = status
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserMatchModel) -> UserMatch:
        return UserMatch(
            id=model.id,
            user_id=model.user_id,
            matched_user_id=model.matched_user_id,
            match_score=float(model.match_score) if model.match_score is not None else None,
            match_reason=model.match_reason,
            status=model.status,
            created_at=ensure_app_timezone(model.created_at),
            matched_user=UserRepository._to_entity(model.matched_user)
            if model.matched_user is not None
            else None,
        )


def _to_decimal(value: float | None) -> Decimal | None:
    if value is None:
        return None
    return Decimal(str(value)).quantize(Decimal("0.01"))


__all__ = ["MatchRepository"]
