"""Domain entity representing a Splitfy user profile."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

ROLE_USER = "user"
ROLE_ADMIN = "admin"

SUBSCRIPTION_TIER_FREE = "free"


@dataclass
class User:
    """Core attributes describing an application user and their public profile."""

    id: int | None
    email: str | None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    bio: str | None = None
    skills: list[str] = field(default_factory=list)
    preferences: dict[str, Any] = field(default_factory=dict)
    contact_info: dict[str, Any] = field(default_factory=dict)
    role: str = ROLE_USER
    is_active: bool = True
    subscription_status: str = SUBSCRIPTION_TIER_FREE
    subscription_tier: str = SUBSCRIPTION_TIER_FREE
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def display_name(self) -> str:
        """Return the full name, falling back to the e-mail address."""

        parts = [part for part in (self.first_name, self.last_name) if part]
        if parts:
            return " ".join(parts)
        return self.email or f"user-{self.id}"

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return (self.role or "").lower() == role.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)

    def profile_completeness(self) -> int:
        """Return the completeness percentage of the public profile.

        Bio, skills, profile image and phone number each count for 25%.
        """

        completeness = 0
        if self.bio:
            completeness += 25
        if self.skills:
            completeness += 25
        if self.profile_image_url:
            completeness += 25
        if (self.contact_info or {}).get("phone"):
            completeness += 25
        return completeness


__all__ = ["User", "ROLE_USER", "ROLE_ADMIN", "SUBSCRIPTION_TIER_FREE"]
