"""SQLAlchemy models for user activity and profile views."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from splitfy.infrastructure.database import Base
from splitfy.utils import now_in_app_naive_datetime


class UserActivityModel(Base):
    """Database representation of a tracked activity event."""

    __tablename__ = "user_activity"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    activity_type = Column(String(50), nullable=False, index=True)
    activity_data = Column(JSON, nullable=True)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)
    created_at = Column(
        DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True
    )

    user = relationship("UserModel", lazy="joined")


class ProfileViewModel(Base):
    """Database representation of a profile view."""

    __tablename__ = "profile_view"

    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    viewer_id = Column(Integer, ForeignKey("user.id"), nullable=True)
    viewed_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["UserActivityModel", "ProfileViewModel"]
