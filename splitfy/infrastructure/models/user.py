"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, String, Text

from splitfy.infrastructure.database import Base
from splitfy.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Database representation of a Splitfy user and public profile."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(120), nullable=True, unique=True, index=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    profile_image_url = Column(String(500), nullable=True)
    bio = Column(Text, nullable=True)
    skills = Column(JSON, nullable=False, default=list)
    preferences = Column(JSON, nullable=False, default=dict)
    contact_info = Column(JSON, nullable=False, default=dict)
    role = Column(String(20), nullable=False, default="user")
    is_active = Column(Boolean, nullable=False, default=True)
    subscription_status = Column(String(20), nullable=False, default="free")
    subscription_tier = Column(String(20), nullable=False, default="free")
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["UserModel"]
