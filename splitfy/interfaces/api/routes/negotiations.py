"""Routes for AI-assisted negotiations."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from splitfy.application.use_cases.negotiations import (
    analyze_negotiation_message,
    create_negotiation as create_negotiation_uc,
    get_negotiation as get_negotiation_uc,
    list_negotiation_messages as list_negotiation_messages_uc,
    list_negotiations as list_negotiations_uc,
    post_negotiation_message as post_negotiation_message_uc,
    update_negotiation as update_negotiation_uc,
)
from splitfy.domain.entities import User
from splitfy.infrastructure.database import get_db
from splitfy.infrastructure.openai_client import NegotiationAnalysisService
from splitfy.interfaces.api.dependencies import (
    get_current_active_user,
    get_negotiation_analysis_service,
)
from splitfy.interfaces.api.routes_helpers import http_error_from
from splitfy.interfaces.api.schemas import (
    NegotiationCreate,
    NegotiationMessageCreate,
    NegotiationMessageRead,
    NegotiationRead,
    NegotiationUpdate,
)

router = APIRouter(prefix="/negotiations", tags=["negotiations"])
logger = logging.getLogger(__name__)


@router.get("", response_model=list[NegotiationRead])
def list_negotiations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    negotiations = list_negotiations_uc(db, user_id=current_user.id)
    return [NegotiationRead.model_validate(negotiation) for negotiation in negotiations]


@router.post("", response_model=NegotiationRead, status_code=status.HTTP_201_CREATED)
def create_negotiation(
    payload: NegotiationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Open a negotiation and notify its participants."""

    try:
        negotiation = create_negotiation_uc(
            db,
            created_by=current_user.id,
            title=payload.title,
            description=payload.description,
            participants=payload.participants,
            ai_assistant_enabled=payload.ai_assistant_enabled,
            negotiation_data=payload.negotiation_data,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return NegotiationRead.model_validate(negotiation)


@router.get("/{negotiation_id}", response_model=NegotiationRead)
def read_negotiation(
    negotiation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        negotiation = get_negotiation_uc(
            db, negotiation_id=negotiation_id, user_id=current_user.id
        )
    except (PermissionError, ValueError) as exc:
        raise http_error_from(exc) from exc
    return NegotiationRead.model_validate(negotiation)


@router.patch("/{negotiation_id}", response_model=NegotiationRead)
def update_negotiation(
    negotiation_id: int,
    payload: NegotiationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        negotiation = update_negotiation_uc(
            db,
            negotiation_id=negotiation_id,
            user_id=current_user.id,
            **payload.model_dump(exclude_unset=True),
        )
    except (PermissionError, ValueError) as exc:
        raise http_error_from(exc) from exc
    return NegotiationRead.model_validate(negotiation)


@router.get("/{negotiation_id}/messages", response_model=list[NegotiationMessageRead])
def list_negotiation_messages(
    negotiation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        messages = list_negotiation_messages_uc(
            db, negotiation_id=negotiation_id, user_id=current_user.id
        )
    except (PermissionError, ValueError) as exc:
        raise http_error_from(exc) from exc
    return [NegotiationMessageRead.model_validate(message) for message in messages]


@router.post(
    "/{negotiation_id}/messages",
    response_model=NegotiationMessageRead,
    status_code=status.HTTP_201_CREATED,
)
def post_negotiation_message(
    negotiation_id: int,
    payload: NegotiationMessageCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    analysis_service: NegotiationAnalysisService | None = Depends(
        get_negotiation_analysis_service
    ),
):
    """Store a message and schedule its analysis after the response is sent."""

    try:
        message, should_analyze = post_negotiation_message_uc(
            db,
            negotiation_id=negotiation_id,
            sender_id=current_user.id,
            message=payload.message,
            message_type=payload.message_type,
        )
    except (PermissionError, ValueError) as exc:
        raise http_error_from(exc) from exc

    if should_analyze:
        if analysis_service is None:
            logger.info(
                "Skipping analysis of negotiation message %s: assistant not configured",
                message.id,
            )
        else:
            background_tasks.add_task(
                analyze_negotiation_message, message.id, analyzer=analysis_service
            )
    return NegotiationMessageRead.model_validate(message)


__all__ = ["router"]
