"""Persistence helpers for activity events and profile views."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime

from sqlalchemy import func, insert
from sqlalchemy.orm import Session

from splitfy.domain.entities import ProfileView, UserActivity
from splitfy.infrastructure.models import ProfileViewModel, UserActivityModel
from splitfy.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_naive_datetime,
)


class ActivityRepository:
    """Store and aggregate :class:`UserActivity` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, activity: UserActivity) -> UserActivity:
        model = UserActivityModel(
            user_id=activity.user_id,
            activity_type=activity.activity_type,
            activity_data=activity.activity_data,
            ip_address=activity.ip_address,
            user_agent=activity.user_agent,
            created_at=ensure_app_naive_datetime(activity.created_at)
            or now_in_app_naive_datetime(),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def bulk_create(self, activities: Sequence[UserActivity]) -> int:
        """Insert ``activities`` with a single statement and return the row count."""

        if not activities:
            return 0
        now = now_in_app_naive_datetime()
        rows = [
            {
                "user_id": activity.user_id,
                "activity_type": activity.activity_type,
                "activity_data": activity.activity_data,
                "ip_address": activity.ip_address,
                "user_agent": activity.user_agent,
                "created_at": ensure_app_naive_datetime(activity.created_at) or now,
            }
            for activity in activities
        ]
        self.session.execute(insert(UserActivityModel), rows)
        self.session.commit()
        return len(rows)

    def list_recent(
        self, *, limit: int = 100, user_id: int | None = None
    ) -> Sequence[UserActivity]:
        query = self.session.query(UserActivityModel)
        if user_id is not None:
            query = query.filter(UserActivityModel.user_id == user_id)
        query = query.order_by(
            UserActivityModel.created_at.desc(), UserActivityModel.id.desc()
        ).limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_distinct_users_since(self, since: datetime) -> int:
        return (
            self.session.query(func.count(func.distinct(UserActivityModel.user_id)))
            .filter(UserActivityModel.created_at >= ensure_app_naive_datetime(since))
            .scalar()
            or 0
        )

    def has_activity_since(self, user_id: int, since: datetime) -> bool:
        query = (
            self.session.query(UserActivityModel.id)
            .filter(UserActivityModel.user_id == user_id)
            .filter(UserActivityModel.created_at >= ensure_app_naive_datetime(since))
        )
        return self.session.query(query.exists()).scalar()

    def daily_counts(
        self,
        activity_type: str,
        since: datetime,
        *,
        user_id: int | None = None,
        distinct_users: bool = False,
    ) -> dict[date, int]:
        """Return the number of ``activity_type`` events per day since ``since``.

        With ``distinct_users`` each user is counted once per day.
        """

        day = func.date(UserActivityModel.created_at)
        counted = (
            func.count(func.distinct(UserActivityModel.user_id))
            if distinct_users
            else func.count(UserActivityModel.id)
        )
        query = (
            self.session.query(day, counted)
            .filter(UserActivityModel.activity_type == activity_type)
            .filter(UserActivityModel.created_at >= ensure_app_naive_datetime(since))
        )
        if user_id is not None:
            query = query.filter(UserActivityModel.user_id == user_id)
        return {_as_date(value): count for value, count in query.group_by(day).all()}

    def record_profile_view(self, view: ProfileView) -> ProfileView:
        model = ProfileViewModel(
            profile_id=view.profile_id,
            viewer_id=view.viewer_id,
            viewed_at=ensure_app_naive_datetime(view.viewed_at)
            or now_in_app_naive_datetime(),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return ProfileView(
            id=model.id,
            profile_id=model.profile_id,
            viewer_id=model.viewer_id,
            viewed_at=ensure_app_timezone(model.viewed_at),
        )

    def daily_profile_views(
        self, since: datetime, *, profile_id: int | None = None
    ) -> dict[date, int]:
        day = func.date(ProfileViewModel.viewed_at)
        query = self.session.query(day, func.count(ProfileViewModel.id)).filter(
            ProfileViewModel.viewed_at >= ensure_app_naive_datetime(since)
        )
        if profile_id is not None:
            query = query.filter(ProfileViewModel.profile_id == profile_id)
        return {_as_date(value): count for value, count in query.group_by(day).all()}

    @staticmethod
    def _to_entity(model: UserActivityModel) -> UserActivity:
        user = model.user
        user_name = None
        if user is not None:
            user_name = " ".join(part for part in (user.first_name, user.last_name) if part) or None
        return UserActivity(
            id=model.id,
            user_id=model.user_id,
            activity_type=model.activity_type,
            activity_data=model.activity_data,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            created_at=ensure_app_timezone(model.created_at),
            user_name=user_name,
            user_email=user.email if user is not None else None,
        )


def _as_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


__all__ = ["ActivityRepository"]
