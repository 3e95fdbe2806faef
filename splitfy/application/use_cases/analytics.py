"""Engagement analytics for a single user or the whole platform."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, timedelta

from sqlalchemy.orm import Session

from splitfy.domain.entities import ACTIVITY_LOGIN, ACTIVITY_MESSAGE_SENT
from splitfy.infrastructure.repositories import ActivityRepository, UserRepository
from splitfy.utils import (
    ensure_app_timezone,
    now_in_app_timezone,
    start_of_day,
    trailing_days,
)

SERIES_DAYS = 30
ACTIVE_WINDOW_DAYS = 7
TOP_SKILLS = 8
TOP_LOCATIONS = 10
COMPLETENESS_BUCKETS: tuple[tuple[str, int], ...] = (
    ("0-25%", 25),
    ("26-50%", 50),
    ("51-75%", 75),
    ("76-100%", 100),
)


@dataclass(frozen=True)
class UserStats:
    total_users: int
    active_users: int
    new_users_today: int
    user_growth_rate: int


@dataclass(frozen=True)
class DailyCount:
    date: date
    count: int


@dataclass(frozen=True)
class AnalyticsReport:
    user_stats: UserStats
    daily_logins: list[DailyCount]
    profile_views: list[DailyCount]
    messages_sent: list[DailyCount]
    profile_completeness: list[tuple[str, int]] = field(default_factory=list)
    top_skills: list[tuple[str, int]] = field(default_factory=list)
    users_by_location: list[tuple[str, int]] = field(default_factory=list)


def _fill_series(counts: dict[date, int], days: list[date]) -> list[DailyCount]:
    return [DailyCount(date=day, count=counts.get(day, 0)) for day in days]


def growth_rate(previous: int, current: int) -> int:
    """Percentage growth between two periods, ``0`` without a baseline."""

    if previous <= 0:
        return 0
    return round((current - previous) / previous * 100)


def get_analytics(session: Session, *, user_id: int | None = None) -> AnalyticsReport:
    """Build the analytics report.

    With ``user_id`` the user statistics and daily series describe that user
    only; engagement figures always cover the whole platform.
    """

    now = now_in_app_timezone()
    today = start_of_day(now)
    series_start = start_of_day(now - timedelta(days=SERIES_DAYS - 1))
    active_since = now - timedelta(days=ACTIVE_WINDOW_DAYS)
    days = trailing_days(now, SERIES_DAYS)

    users = UserRepository(session)
    activity = ActivityRepository(session)

    if user_id is not None:
        user = users.get(user_id)
        if user is None:
            raise ValueError("User not found")
        created_at = ensure_app_timezone(user.created_at)
        user_stats = UserStats(
            total_users=1,
            active_users=1 if activity.has_activity_since(user_id, active_since) else 0,
            new_users_today=1 if created_at is not None and created_at >= today else 0,
            user_growth_rate=0,
        )
    else:
        current_start = now - timedelta(days=SERIES_DAYS)
        previous_start = now - timedelta(days=SERIES_DAYS * 2)
        user_stats = UserStats(
            total_users=users.count(),
            active_users=activity.count_distinct_users_since(active_since),
            new_users_today=users.count_created_between(today),
            user_growth_rate=growth_rate(
                users.count_created_between(previous_start, current_start),
                users.count_created_between(current_start),
            ),
        )

    logins = activity.daily_counts(
        ACTIVITY_LOGIN, series_start, user_id=user_id, distinct_users=user_id is None
    )
    views = activity.daily_profile_views(series_start, profile_id=user_id)
    messages = activity.daily_counts(ACTIVITY_MESSAGE_SENT, series_start, user_id=user_id)

    all_users = users.list_all()
    buckets = Counter()
    skills: Counter[str] = Counter()
    locations: Counter[str] = Counter()
    for profile in all_users:
        completeness = profile.profile_completeness()
        label = next(name for name, upper in COMPLETENESS_BUCKETS if completeness <= upper)
        buckets[label] += 1
        skills.update(profile.skills or [])
        location = (profile.contact_info or {}).get("location")
        if location:
            locations[str(location)] += 1

    return AnalyticsReport(
        user_stats=user_stats,
        daily_logins=_fill_series(logins, days),
        profile_views=_fill_series(views, days),
        messages_sent=_fill_series(messages, days),
        profile_completeness=[(name, buckets.get(name, 0)) for name, _ in COMPLETENESS_BUCKETS],
        top_skills=skills.most_common(TOP_SKILLS),
        users_by_location=locations.most_common(TOP_LOCATIONS),
    )


__all__ = [
    "AnalyticsReport",
    "DailyCount",
    "UserStats",
    "get_analytics",
    "growth_rate",
]
