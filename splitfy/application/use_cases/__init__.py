"""Aggregate application use cases."""

from .activity import record_activity, record_activity_batch
from .recommendations import recommend_users, score_candidates
from .users import get_user, upsert_user

__all__ = [
    "record_activity",
    "record_activity_batch",
    "recommend_users",
    "score_candidates",
    "get_user",
    "upsert_user",
]
