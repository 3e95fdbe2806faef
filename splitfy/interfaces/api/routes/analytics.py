"""Routes exposing engagement analytics and user administration."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from splitfy.application.use_cases.analytics import AnalyticsReport, get_analytics
from splitfy.application.use_cases.users import list_users as list_users_uc
from splitfy.domain.entities import User
from splitfy.infrastructure.database import get_db
from splitfy.interfaces.api.dependencies import get_current_active_user, require_admin
from splitfy.interfaces.api.routes_helpers import http_error_from, to_user_read
from splitfy.interfaces.api.schemas import (
    ActivityStatsRead,
    AnalyticsRead,
    CompletenessBucketRead,
    DailyCountRead,
    EngagementRead,
    LocationCountRead,
    SkillCountRead,
    UserPage,
    UserStatsRead,
)

router = APIRouter(tags=["analytics"])


def _report_to_schema(report: AnalyticsReport) -> AnalyticsRead:
    return AnalyticsRead(
        user_stats=UserStatsRead.model_validate(report.user_stats),
        activity_stats=ActivityStatsRead(
            daily_logins=[DailyCountRead.model_validate(d) for d in report.daily_logins],
            profile_views=[DailyCountRead.model_validate(d) for d in report.profile_views],
            messages_sent=[DailyCountRead.model_validate(d) for d in report.messages_sent],
        ),
        user_engagement=EngagementRead(
            profile_completeness=[
                CompletenessBucketRead(range=label, count=count)
                for label, count in report.profile_completeness
            ],
            top_skills=[
                SkillCountRead(skill=skill, count=count) for skill, count in report.top_skills
            ],
            users_by_location=[
                LocationCountRead(location=location, count=count)
                for location, count in report.users_by_location
            ],
        ),
    )


@router.get("/analytics", response_model=AnalyticsRead)
def read_user_analytics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Return the analytics scoped to the authenticated user."""

    try:
        report = get_analytics(db, user_id=current_user.id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return _report_to_schema(report)


@router.get("/analytics/global", response_model=AnalyticsRead)
def read_global_analytics(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return _report_to_schema(get_analytics(db))


@router.get("/admin/users", response_model=UserPage)
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: str | None = Query(None, max_length=100),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    users, total = list_users_uc(db, page=page, limit=limit, search=search)
    return UserPage(
        items=[to_user_read(user) for user in users],
        total=total,
        page=page,
        limit=limit,
    )


__all__ = ["router"]
