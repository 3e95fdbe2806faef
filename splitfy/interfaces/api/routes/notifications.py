"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

import logging

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from splitfy.application.use_cases.notifications import (
    list_notifications as list_notifications_uc,
    mark_all_notifications_read,
    mark_notification_read as mark_notification_read_uc,
)
from splitfy.domain.entities import User
from splitfy.infrastructure.database import SessionLocal, get_db
from splitfy.infrastructure.notifications import connection_manager, serialize_notification
from splitfy.interfaces.api.dependencies import get_current_active_user, resolve_current_user
from splitfy.interfaces.api.routes_helpers import http_error_from
from splitfy.interfaces.api.schemas import NotificationRead, NotificationsMarkedRead

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.get("", response_model=list[NotificationRead])
def list_notifications(
    unread_only: bool = Query(False),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Return the most recent notifications for the authenticated user."""

    notifications = list_notifications_uc(
        db, user_id=current_user.id, unread_only=unread_only, limit=limit
    )
    return [NotificationRead.model_validate(n) for n in notifications]


@router.patch("/read-all", response_model=NotificationsMarkedRead)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    return NotificationsMarkedRead(
        updated=mark_all_notifications_read(db, user_id=current_user.id)
    )


@router.patch("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    try:
        notification = mark_notification_read_uc(
            db, notification_id=notification_id, user_id=current_user.id
        )
    except (PermissionError, ValueError) as exc:
        raise http_error_from(exc) from exc
    return NotificationRead.model_validate(notification)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Stream notifications and direct messages to the authenticated user."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
        pending = list_notifications_uc(session, user_id=user.id, unread_only=True)
    except HTTPException:
        await websocket.close(code=1008)
        return
    finally:
        session.close()

    await connection_manager.connect(user.id, websocket)
    try:
        if pending:
            await websocket.send_json(
                {"type": "init", "data": [serialize_notification(n) for n in pending]}
            )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        logger.debug("Notification websocket closed for user %s", user.id)
    finally:
        connection_manager.disconnect(user.id, websocket)


__all__ = ["router"]
