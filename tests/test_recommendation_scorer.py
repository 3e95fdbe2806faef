"""Scoring and ranking of recommended collaborators."""

from __future__ import annotations

import random

import pytest

from splitfy.application.use_cases.recommendations import (
    FALLBACK_REASON,
    recommend_users,
    score_candidate,
    score_candidates,
)
from splitfy.domain.entities import User


def _user(user_id: int, skills: list[str]) -> User:
    return User(id=user_id, email=f"u{user_id}@example.com", skills=skills)


class FixedRandom(random.Random):
    def __init__(self, value: float) -> None:
        super().__init__()
        self.value = value

    def random(self) -> float:
        return self.value


def test_shared_skills_outrank_unrelated_candidates_on_average():
    requester = _user(1, ["mixing", "mastering"])
    overlapping = _user(2, ["mixing", "mastering", "vocals"])
    unrelated = _user(3, ["drums"])
    rng = random.Random(20240501)

    totals = {2: 0.0, 3: 0.0}
    for _ in range(1000):
        for result in score_candidates(requester, [overlapping, unrelated], rng=rng):
            totals[result.candidate.id] += result.match_score

    assert totals[2] / 1000 > totals[3] / 1000


def test_empty_pool_and_zero_limit_return_nothing():
    requester = _user(1, ["mixing"])

    assert score_candidates(requester, []) == []
    assert score_candidates(requester, [_user(2, ["mixing"])], limit=0) == []
    assert score_candidates(requester, [_user(2, ["mixing"])], limit=-3) == []
    assert score_candidates(None, [_user(2, ["mixing"])]) == []


@pytest.mark.parametrize("limit", [1, 3, 10, 25])
def test_results_respect_limit_and_score_bounds(limit):
    rng = random.Random(limit)
    requester = _user(1, ["guitar", "bass", "mixing"])
    pool = [
        _user(index, rng.sample(["guitar", "bass", "mixing", "drums", "vocals"], k=2))
        for index in range(2, 22)
    ]

    results = score_candidates(requester, pool, limit=limit, rng=rng)

    assert len(results) == min(limit, len(pool))
    assert all(0 <= result.match_score <= 1 for result in results)
    scores = [result.match_score for result in results]
    assert scores == sorted(scores, reverse=True)


def test_score_is_skill_ratio_plus_jitter_rounded_half_up():
    requester = _user(1, ["mixing", "mastering"])
    candidate = _user(2, ["mixing", "mastering", "vocals"])

    result = score_candidate(requester, candidate, rng=FixedRandom(0.5))

    # 2/3 + 0.15 = 0.8166...
    assert result.match_score == 0.82
    assert result.match_reason == "Shared skills: mixing, mastering"


def test_duplicate_skills_do_not_lower_the_score():
    requester = _user(1, ["mixing", "mixing"])
    candidate = _user(2, ["mixing"])

    result = score_candidate(requester, candidate, rng=FixedRandom(0.0))

    assert result.match_score == 1.0
    assert result.match_reason == "Shared skills: mixing"


def test_score_is_capped_at_one():
    requester = _user(1, ["mixing"])
    candidate = _user(2, ["mixing"])

    result = score_candidate(requester, candidate, rng=FixedRandom(0.99))

    assert result.match_score == 1.0


def test_reason_lists_at_most_three_skills_in_requester_order():
    requester = _user(1, ["vocals", "drums", "bass", "guitar"])
    candidate = _user(2, ["guitar", "bass", "drums", "vocals"])

    result = score_candidate(requester, candidate, rng=FixedRandom(0.0))

    assert result.match_reason == "Shared skills: vocals, drums, bass"
    assert result.match_score == 1.0


def test_skill_matching_is_case_sensitive():
    requester = _user(1, ["Mixing"])
    candidate = _user(2, ["mixing"])

    result = score_candidate(requester, candidate, rng=FixedRandom(0.0))

    assert result.match_score == 0.0
    assert result.match_reason == FALLBACK_REASON


def test_users_without_skills_get_fallback_reason():
    result = score_candidate(_user(1, []), _user(2, []), rng=FixedRandom(0.1))

    assert result.match_score == 0.03
    assert result.match_reason == FALLBACK_REASON


def test_ties_keep_candidate_order():
    requester = _user(1, ["mixing"])
    pool = [_user(index, ["mixing"]) for index in range(2, 6)]

    results = score_candidates(requester, pool, rng=FixedRandom(0.0))

    assert [result.candidate.id for result in results] == [2, 3, 4, 5]


def test_recommend_users_excludes_requester_and_inactive_users(session, make_user):
    requester = make_user(skills=["mixing"])
    active = make_user(skills=["mixing"])
    make_user(skills=["mixing"], is_active=False)

    results = recommend_users(session, requester.id, rng=random.Random(1))

    assert [result.candidate.id for result in results] == [active.id]


def test_recommend_users_for_unknown_requester_is_empty(session, make_user):
    make_user(skills=["mixing"])

    assert recommend_users(session, 9999) == []
