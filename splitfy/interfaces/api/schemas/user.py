"""User and profile schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserRead(BaseModel):
    id: int
    email: str | None
    first_name: str | None
    last_name: str | None
    display_name: str
    profile_image_url: str | None
    bio: str | None
    skills: list[str]
    preferences: dict[str, Any]
    contact_info: dict[str, Any]
    role: str
    is_active: bool
    subscription_status: str
    subscription_tier: str
    profile_completeness: int
    created_at: datetime | None
    updated_at: datetime | None


class PublicProfileRead(BaseModel):
    """Subset of the profile visible to other users."""

    id: int
    first_name: str | None
    last_name: str | None
    display_name: str
    profile_image_url: str | None
    bio: str | None
    skills: list[str]
    location: str | None = None


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    bio: str | None = Field(default=None, max_length=2000)
    skills: list[str] | None = None
    preferences: dict[str, Any] | None = None
    contact_info: dict[str, Any] | None = None


class ProfileImageUpdate(BaseModel):
    image_url: str = Field(..., min_length=1, max_length=500)


class UploadedObjectRead(BaseModel):
    url: str
    path: str


class UserPage(BaseModel):
    items: list[UserRead]
    total: int
    page: int
    limit: int


__all__ = [
    "UserRead",
    "PublicProfileRead",
    "ProfileUpdate",
    "ProfileImageUpdate",
    "UploadedObjectRead",
    "UserPage",
]
