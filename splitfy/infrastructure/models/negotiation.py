"""SQLAlchemy models for negotiations and their conversation."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    Numeric,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import relationship

from splitfy.infrastructure.database import Base
from splitfy.utils import now_in_app_naive_datetime

negotiation_participant_table = Table(
    "negotiation_participant",
    Base.metadata,
    Column(
        "negotiation_id",
        Integer,
        ForeignKey("negotiation.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("user_id", Integer, ForeignKey("user.id"), primary_key=True),
)


class NegotiationModel(Base):
    """Database representation of a negotiation."""

    __tablename__ = "negotiation"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="active")
    created_by = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    ai_assistant_enabled = Column(Boolean, nullable=False, default=True)
    negotiation_data = Column(JSON, nullable=False, default=dict)
    outcome = Column(JSON, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)

    participants = relationship(
        "UserModel", secondary=negotiation_participant_table, lazy="selectin"
    )
    messages = relationship(
        "NegotiationMessageModel",
        back_populates="negotiation",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="NegotiationMessageModel.created_at",
    )


class NegotiationMessageModel(Base):
    """Database representation of a negotiation conversation entry."""

    __tablename__ = "negotiation_message"

    id = Column(Integer, primary_key=True, index=True)
    negotiation_id = Column(
        Integer,
        ForeignKey("negotiation.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id = Column(Integer, ForeignKey("user.id"), nullable=False)
    message = Column(Text, nullable=False)
    message_type = Column(String(20), nullable=False, default="text")
    sentiment_score = Column(Numeric(3, 2), nullable=True)
    ai_analysis = Column(JSON, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    negotiation = relationship("NegotiationModel", back_populates="messages")


__all__ = [
    "NegotiationModel",
    "NegotiationMessageModel",
    "negotiation_participant_table",
]
