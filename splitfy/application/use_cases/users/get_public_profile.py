"""Use case for viewing another user's public profile."""

from sqlalchemy.orm import Session

from splitfy.domain.entities import ProfileView, User
from splitfy.infrastructure.repositories import ActivityRepository, UserRepository


def get_public_profile(session: Session, *, profile_id: int, viewer_id: int | None) -> User:
    """Return the profile of ``profile_id`` and count the view.

    Users viewing their own profile are not counted.
    """

    user = UserRepository(session).get(profile_id)
    if user is None or not user.is_active:
        raise ValueError("User not found")
    if viewer_id != profile_id:
        ActivityRepository(session).record_profile_view(
            ProfileView(id=None, profile_id=profile_id, viewer_id=viewer_id)
        )
    return user
