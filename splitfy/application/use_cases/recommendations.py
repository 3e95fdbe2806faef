"""Skill based user recommendations.

Candidates are ranked by the share of skills they have in common with the
requester plus a small random jitter in ``[0, 0.3)`` so that users with no
overlap still surface occasionally.
"""

from __future__ import annotations

import math
import random
from collections.abc import Sequence

from sqlalchemy.orm import Session

from splitfy.domain.entities import CandidateScore, User
from splitfy.infrastructure.repositories import UserRepository

DEFAULT_LIMIT = 10
JITTER_RANGE = 0.3
MAX_REASON_SKILLS = 3
FALLBACK_REASON = "Similar profile interests"


def _round_half_up(value: float) -> float:
    return math.floor(value * 100 + 0.5) / 100


def _common_skills(requester_skills: Sequence[str], candidate_skills: Sequence[str]) -> list[str]:
    candidate_set = set(candidate_skills)
    common: list[str] = []
    for skill in requester_skills:
        if skill in candidate_set and skill not in common:
            common.append(skill)
    return common


def score_candidate(
    requester: User, candidate: User, *, rng: random.Random | None = None
) -> CandidateScore:
    """Score a single ``candidate`` against ``requester``."""

    rng = rng or random
    requester_skills = list(requester.skills or [])
    candidate_skills = list(candidate.skills or [])
    common = _common_skills(requester_skills, candidate_skills)

    denominator = max(len(set(requester_skills)), len(set(candidate_skills)), 1)
    skill_score = len(common) / denominator
    random_score = rng.random() * JITTER_RANGE
    match_score = _round_half_up(min(skill_score + random_score, 1.0))

    if common:
        reason = "Shared skills: " + ", ".join(common[:MAX_REASON_SKILLS])
    else:
        reason = FALLBACK_REASON
    return CandidateScore(candidate=candidate, match_score=match_score, match_reason=reason)


def score_candidates(
    requester: User | None,
    candidates: Sequence[User],
    limit: int = DEFAULT_LIMIT,
    rng: random.Random | None = None,
) -> list[CandidateScore]:
    """Return at most ``limit`` candidates ordered by descending score.

    Ties keep the order of ``candidates``. A missing requester, an empty pool
    or a non-positive ``limit`` yield an empty list.
    """

    if requester is None or not candidates or limit <= 0:
        return []
    scored = [score_candidate(requester, candidate, rng=rng) for candidate in candidates]
    scored.sort(key=lambda item: item.match_score, reverse=True)
    return scored[:limit]


def recommend_users(
    session: Session,
    user_id: int,
    *,
    limit: int = DEFAULT_LIMIT,
    rng: random.Random | None = None,
) -> list[CandidateScore]:
    """Recommend active users to ``user_id``."""

    repository = UserRepository(session)
    requester = repository.get(user_id)
    if requester is None:
        return []
    candidates = repository.list_active_except(user_id)
    return score_candidates(requester, candidates, limit=limit, rng=rng)


__all__ = ["score_candidate", "score_candidates", "recommend_users", "DEFAULT_LIMIT"]
