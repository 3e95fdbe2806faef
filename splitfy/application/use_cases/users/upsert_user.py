"""Use case for registering users coming from the identity provider."""

from dataclasses import replace

from sqlalchemy.orm import Session

from splitfy.domain.entities import ROLE_USER, User
from splitfy.infrastructure.repositories import UserRepository


def upsert_user(
    session: Session,
    *,
    user_id: int | None = None,
    email: str | None,
    first_name: str | None = None,
    last_name: str | None = None,
    profile_image_url: str | None = None,
    role: str | None = None,
) -> User:
    """Create the user or refresh the identity attributes of an existing one."""

    repository = UserRepository(session)
    normalized_email = email.strip().lower() if email else None

    existing = repository.get(user_id) if user_id is not None else None
    if existing is None and normalized_email:
        existing = repository.get_by_email(normalized_email)

    if existing is None:
        return repository.create(
            User(
                id=user_id,
                email=normalized_email,
                first_name=first_name,
                last_name=last_name,
                profile_image_url=profile_image_url,
                role=role or ROLE_USER,
            )
        )

    updated = replace(
        existing,
        email=normalized_email or existing.email,
        first_name=first_name if first_name is not None else existing.first_name,
        last_name=last_name if last_name is not None else existing.last_name,
        profile_image_url=profile_image_url
        if profile_image_url is not None
        else existing.profile_image_url,
        role=role or existing.role,
    )
    return repository.update(updated)
