"""Use cases for managing users and their profiles."""

from .get_public_profile import get_public_profile
from .get_user import get_user
from .list_users import list_users
from .update_profile import normalize_skills, update_profile, update_profile_image
from .upsert_user import upsert_user

__all__ = [
    "get_public_profile",
    "get_user",
    "list_users",
    "normalize_skills",
    "update_profile",
    "update_profile_image",
    "upsert_user",
]
