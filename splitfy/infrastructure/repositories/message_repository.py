"""Persistence helpers for direct messages."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session

from splitfy.domain.entities import Message
from splitfy.infrastructure.models import MessageModel
from splitfy.utils import ensure_app_timezone


class MessageRepository:
    """Store and query :class:`Message` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, message: Message) -> Message:
        model = MessageModel(
            sender_id=message.sender_id,
            receiver_id=message.receiver_id,
            content=message.content,
            message_type=message.message_type,
            is_read=message.is_read,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_between(
        self, user_id: int, partner_id: int, *, limit: int = 50
    ) -> Sequence[Message]:
        """Return the messages exchanged by two users, newest first."""

        query = (
            self.session.query(MessageModel)
            .filter(
                or_(
                    and_(
                        MessageModel.sender_id == user_id,
                        MessageModel.receiver_id == partner_id,
                    ),
                    and_(
                        MessageModel.sender_id == partner_id,
                        MessageModel.receiver_id == user_id,
                    ),
                )
            )
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_involving(self, user_id: int) -> Sequence[Message]:
        """Return every message sent or received by ``user_id``, newest first."""

        query = (
            self.session.query(MessageModel)
            .filter(
                or_(MessageModel.sender_id == user_id, MessageModel.receiver_id == user_id)
            )
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def unread_counts_by_sender(self, receiver_id: int) -> dict[int, int]:
        query = (
            self.session.query(MessageModel.sender_id, func.count(MessageModel.id))
            .filter(MessageModel.receiver_id == receiver_id)
            .filter(MessageModel.is_read.is_(False))
            .group_by(MessageModel.sender_id)
        )
        return {sender_id: count for sender_id, count in query.all()}

    def mark_as_read(self, *, sender_id: int, receiver_id: int) -> int:
        updated = (
            self.session.query(MessageModel)
            .filter(MessageModel.sender_id == sender_id)
            .filter(MessageModel.receiver_id == receiver_id)
            .filter(MessageModel.is_read.is_(False))
            .update({MessageModel.is_read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    @staticmethod
    def _to_entity(model: MessageModel) -> Message:
        return Message(
            id=model.id,
            sender_id=model.sender_id,
            receiver_id=model.receiver_id,
            content=model.content,
            message_type=model.message_type,
            is_read=model.is_read,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["MessageRepository"]
