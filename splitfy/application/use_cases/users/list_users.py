"""Use case for the paginated administrator user listing."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from splitfy.domain.entities import User
from splitfy.infrastructure.repositories import UserRepository


def list_users(
    session: Session, *, page: int = 1, limit: int = 20, search: str | None = None
) -> tuple[Sequence[User], int]:
    """Return the requested page of users and the total number of matches."""

    if page < 1:
        raise ValueError("page must be greater than zero")
    if limit < 1:
        raise ValueError("limit must be greater than zero")
    return UserRepository(session).search(
        search=(search or "").strip() or None,
        skip=(page - 1) * limit,
        limit=limit,
    )
