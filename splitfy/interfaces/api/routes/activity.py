"""Activity sink endpoints fed by the client side activity batcher."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from splitfy.application.use_cases.activity import (
    list_recent_activity,
    record_activity,
    record_activity_batch,
)
from splitfy.domain.entities import User, UserActivity
from splitfy.infrastructure.database import get_db
from splitfy.interfaces.api.dependencies import rate_limit, require_admin
from splitfy.interfaces.api.routes_helpers import client_details, http_error_from
from splitfy.interfaces.api.schemas import (
    ActivityBatchCreate,
    ActivityCreate,
    ActivityRead,
    ActivityRecorded,
)

router = APIRouter(tags=["activity"])


def _activity_to_schema(activity: UserActivity) -> ActivityRead:
    return ActivityRead.model_validate(activity)


@router.post(
    "/activity",
    response_model=ActivityRecorded,
    status_code=status.HTTP_201_CREATED,
)
def create_activity(
    payload: ActivityCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(rate_limit("activity")),
) -> ActivityRecorded:
    """Store one activity, unpacking teardown beacons into their events."""

    ip_address, user_agent = client_details(request)
    try:
        recorded = record_activity(
            db,
            user_id=current_user.id,
            activity_type=payload.activity_type,
            activity_data=payload.activity_data,
            ip_address=ip_address,
            user_agent=user_agent,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return ActivityRecorded(recorded=recorded)


@router.post(
    "/activity/batch",
    response_model=ActivityRecorded,
    status_code=status.HTTP_201_CREATED,
)
def create_activity_batch(
    payload: ActivityBatchCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(rate_limit("activity")),
) -> ActivityRecorded:
    ip_address, user_agent = client_details(request)
    try:
        recorded = record_activity_batch(
            db,
            user_id=current_user.id,
            activities=[
                (activity.activity_type, activity.activity_data)
                for activity in payload.activities
            ],
            ip_address=ip_address,
            user_agent=user_agent,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return ActivityRecorded(recorded=recorded)


@router.get("/admin/activity", response_model=list[ActivityRead])
def read_recent_activity(
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[ActivityRead]:
    """Return the most recent activity rows for administrators."""

    return [_activity_to_schema(activity) for activity in list_recent_activity(db, limit=limit)]


__all__ = ["router"]
