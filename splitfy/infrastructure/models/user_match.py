"""SQLAlchemy model for user matches."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from splitfy.infrastructure.database import Base
from splitfy.utils import now_in_app_naive_datetime


class UserMatchModel(Base):
    """Database representation of a recommendation a user acted upon."""

    __tablename__ = "user_match"
    __table_args__ = (
        UniqueConstraint("user_id", "matched_user_id", name="uq_user_match_pair"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    matched_user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    match_score = Column(Numeric(3, 2), nullable=True)
    match_reason = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="suggested")
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    matched_user = relationship(
        "UserModel", foreign_keys=[matched_user_id], lazy="joined"
    )


__all__ = ["UserMatchModel"]
