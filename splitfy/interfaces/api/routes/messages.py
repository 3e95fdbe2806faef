"""Routes for direct messages between users."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from splitfy.application.use_cases.messages import (
    get_conversation as get_conversation_uc,
    list_conversations as list_conversations_uc,
    mark_conversation_read as mark_conversation_read_uc,
    send_message as send_message_uc,
)
from splitfy.domain.entities import Conversation, User
from splitfy.infrastructure.database import get_db
from splitfy.interfaces.api.dependencies import get_current_active_user, rate_limit
from splitfy.interfaces.api.routes_helpers import http_error_from, to_public_profile
from splitfy.interfaces.api.schemas import (
    ConversationRead,
    MarkedRead,
    MessageCreate,
    MessageRead,
)

router = APIRouter(tags=["messages"])


def _conversation_to_schema(conversation: Conversation) -> ConversationRead:
    return ConversationRead(
        partner=to_public_profile(conversation.partner),
        latest_message=MessageRead.model_validate(conversation.latest_message),
        unread_count=conversation.unread_count,
    )


@router.post("/messages", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
def send_message(
    payload: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(rate_limit("messages")),
):
    """Send a direct message and push it to the receiver."""

    try:
        message = send_message_uc(
            db,
            sender_id=current_user.id,
            receiver_id=payload.receiver_id,
            content=payload.content,
            message_type=payload.message_type,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return MessageRead.model_validate(message)


@router.get("/conversations", response_model=list[ConversationRead])
def list_conversations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    conversations = list_conversations_uc(db, user_id=current_user.id)
    return [_conversation_to_schema(conversation) for conversation in conversations]


@router.get("/conversations/{partner_id}", response_model=list[MessageRead])
def read_conversation(
    partner_id: int,
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        messages = get_conversation_uc(
            db, user_id=current_user.id, partner_id=partner_id, limit=limit
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return [MessageRead.model_validate(message) for message in messages]


@router.patch("/conversations/{sender_id}/read", response_model=MarkedRead)
def mark_conversation_read(
    sender_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    updated = mark_conversation_read_uc(db, user_id=current_user.id, sender_id=sender_id)
    return MarkedRead(updated=updated)


__all__ = ["router"]
