"""Schemas for the analytics report."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict


class UserStatsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_users: int
    active_users: int
    new_users_today: int
    user_growth_rate: int


class DailyCountRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: date
    count: int


class ActivityStatsRead(BaseModel):
    daily_logins: list[DailyCountRead]
    profile_views: list[DailyCountRead]
    messages_sent: list[DailyCountRead]


class CompletenessBucketRead(BaseModel):
    range: str
    count: int


class SkillCountRead(BaseModel):
    skill: str
    count: int


class LocationCountRead(BaseModel):
    location: str
    count: int


class EngagementRead(BaseModel):
    profile_completeness: list[CompletenessBucketRead]
    top_skills: list[SkillCountRead]
    users_by_location: list[LocationCountRead]


class AnalyticsRead(BaseModel):
    user_stats: UserStatsRead
    activity_stats: ActivityStatsRead
    user_engagement: EngagementRead


__all__ = [
    "UserStatsRead",
    "DailyCountRead",
    "ActivityStatsRead",
    "CompletenessBucketRead",
    "SkillCountRead",
    "LocationCountRead",
    "EngagementRead",
    "AnalyticsRead",
]
