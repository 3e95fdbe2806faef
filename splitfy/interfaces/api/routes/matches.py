"""Routes for recommendations and persisted matches."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from splitfy.application.use_cases.matches import (
    create_match as create_match_uc,
    list_matches as list_matches_uc,
    update_match_status as update_match_status_uc,
)
from splitfy.application.use_cases.recommendations import DEFAULT_LIMIT, recommend_users
from splitfy.domain.entities import CandidateScore, User, UserMatch
from splitfy.infrastructure.database import get_db
from splitfy.interfaces.api.dependencies import get_current_active_user
from splitfy.interfaces.api.routes_helpers import http_error_from, to_public_profile
from splitfy.interfaces.api.schemas import (
    MatchCreate,
    MatchRead,
    MatchStatusUpdate,
    RecommendationRead,
)

router = APIRouter(prefix="/matches", tags=["matches"])


def _recommendation_to_schema(score: CandidateScore) -> RecommendationRead:
    return RecommendationRead(
        user=to_public_profile(score.candidate),
        match_score=score.match_score,
        match_reason=score.match_reason,
    )


def _to_read_model(match: UserMatch) -> MatchRead:
    return MatchRead(
        id=match.id,
        user_id=match.user_id,
        matched_user_id=match.matched_user_id,
        match_score=match.match_score,
        match_reason=match.match_reason,
        status=match.status,
        created_at=match.created_at,
        matched_user=to_public_profile(match.matched_user) if match.matched_user else None,
    )


@router.get("/recommendations", response_model=list[RecommendationRead])
def read_recommendations(
    limit: int = Query(DEFAULT_LIMIT, ge=0, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Return the best scored collaborators for the authenticated user."""

    scores = recommend_users(db, current_user.id, limit=limit)
    return [_recommendation_to_schema(score) for score in scores]


@router.post("", response_model=MatchRead, status_code=status.HTTP_201_CREATED)
def create_match(
    payload: MatchCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        match = create_match_uc(
            db,
            user_id=current_user.id,
            matched_user_id=payload.matched_user_id,
            match_score=payload.match_score,
            match_reason=payload.match_reason,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return _to_read_model(match)


@router.get("", response_model=list[MatchRead])
def list_matches(
    status_filter: str | None = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        matches = list_matches_uc(db, user_id=current_user.id, status=status_filter)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return [_to_read_model(match) for match in matches]


@router.patch("/{match_id}", response_model=MatchRead)
def update_match_status(
    match_id: int,
    payload: MatchStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        match = update_match_status_uc(
            db, match_id=match_id, user_id=current_user.id, status=payload.status
        )
    except (PermissionError, ValueError) as exc:
        raise http_error_from(exc) from exc
    return _to_read_model(match)


__all__ = ["router"]
