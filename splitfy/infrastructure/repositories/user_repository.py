"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from splitfy.domain.entities import User
from splitfy.infrastructure.models import UserModel
from splitfy.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.email) == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def list_active_except(self, user_id: int, *, limit: int | None = None) -> Sequence[User]:
        """Return active users other than ``user_id``, oldest accounts first."""

        query = (
            self.session.query(UserModel)
            .filter(UserModel.id != user_id)
            .filter(UserModel.is_active.is_(True))
            .order_by(UserModel.id)
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_all(self) -> Sequence[User]:
        return [self._to_entity(model) for model in self.session.query(UserModel).all()]

    def search(
        self, *, search: str | None = None, skip: int = 0, limit: int = 20
    ) -> tuple[Sequence[User], int]:
        """Return a page of users matching ``search`` and the total match count."""

        query = self.session.query(UserModel)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    UserModel.email.ilike(pattern),
                    UserModel.first_name.ilike(pattern),
                    UserModel.last_name.ilike(pattern),
                )
            )
        total = query.count()
        models = (
            query.order_by(UserModel.created_at.desc(), UserModel.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models], total

    def get_map_by_ids(self, user_ids: Sequence[int]) -> dict[int, User]:
        if not user_ids:
            return {}
        unique_ids = {int(user_id) for user_id in user_ids}
        query = self.session.query(UserModel).filter(UserModel.id.in_(unique_ids))
        return {model.id: self._to_entity(model) for model in query.all()}

    def count(self) -> int:
        return self.session.query(func.count(UserModel.id)).scalar() or 0

    def count_created_between(self, start: datetime, end: datetime | None = None) -> int:
        query = self.session.query(func.count(UserModel.id)).filter(
            UserModel.created_at >= ensure_app_naive_datetime(start)
        )
        if end is not None:
            query = query.filter(UserModel.created_at < ensure_app_naive_datetime(end))
        return query.scalar() or 0

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id) if user.id is not None else None
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        if user.id is not None and model.id is None:
            model.id = user.id
        model.email = user.email
        model.first_name = user.first_name
        model.last_name = user.last_name
        model.profile_image_url = user.profile_image_url
        model.bio = user.bio
        model.skills = list(user.skills or [])
        model.preferences = dict(user.preferences or {})
        model.contact_info = dict(user.contact_info or {})
        model.role = user.role
        model.is_active = user.is_active
        model.subscription_status = user.subscription_status
        model.subscription_tier = user.subscription_tier

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            first_name=model.first_name,
            last_name=model.last_name,
            profile_image_url=model.profile_image_url,
            bio=model.bio,
            skills=list(model.skills or []),
            preferences=dict(model.preferences or {}),
            contact_info=dict(model.contact_info or {}),
            role=model.role,
            is_active=model.is_active,
            subscription_status=model.subscription_status,
            subscription_tier=model.subscription_tier,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["UserRepository"]
