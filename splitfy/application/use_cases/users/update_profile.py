"""Use cases for editing the caller's own profile."""

from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from splitfy.domain.entities import User
from splitfy.infrastructure.repositories import UserRepository

MAX_SKILLS = 50
MAX_SKILL_LENGTH = 50


def normalize_skills(skills: list[str]) -> list[str]:
    """Trim ``skills`` and drop blanks and duplicates, keeping the first spelling."""

    normalized: list[str] = []
    for skill in skills:
        value = (skill or "").strip()
        if not value or value in normalized:
            continue
        if len(value) > MAX_SKILL_LENGTH:
            raise ValueError(f"Skills cannot exceed {MAX_SKILL_LENGTH} characters")
        normalized.append(value)
    if len(normalized) > MAX_SKILLS:
        raise ValueError(f"A profile cannot list more than {MAX_SKILLS} skills")
    return normalized


def update_profile(
    session: Session,
    *,
    user_id: int,
    first_name: str | None = None,
    last_name: str | None = None,
    bio: str | None = None,
    skills: list[str] | None = None,
    preferences: dict[str, Any] | None = None,
    contact_info: dict[str, Any] | None = None,
) -> User:
    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise ValueError("User not found")

    updated = replace(
        user,
        first_name=first_name.strip() if first_name is not None else user.first_name,
        last_name=last_name.strip() if last_name is not None else user.last_name,
        bio=bio.strip() if bio is not None else user.bio,
        skills=normalize_skills(skills) if skills is not None else user.skills,
        preferences=dict(preferences) if preferences is not None else user.preferences,
        contact_info=dict(contact_info) if contact_info is not None else user.contact_info,
    )
    return repository.update(updated)


def update_profile_image(session: Session, *, user_id: int, image_url: str) -> User:
    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise ValueError("User not found")
    image_url = (image_url or "").strip()
    if not image_url:
        raise ValueError("The image URL cannot be empty")
    return repository.update(replace(user, profile_image_url=image_url))
