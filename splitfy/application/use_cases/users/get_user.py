"""Use case for retrieving a single user."""

from sqlalchemy.orm import Session

from splitfy.domain.entities import User
from splitfy.infrastructure.repositories import UserRepository


def get_user(session: Session, user_id: int) -> User:
    """Return the user identified by ``user_id``."""

    user = UserRepository(session).get(user_id)
    if user is None:
        raise ValueError("User not found")
    return user
