"""Sliding window rate limiter."""

import pytest

from splitfy.infrastructure.rate_limit import SlidingWindowRateLimiter


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_hits_beyond_limit_are_rejected_until_window_slides():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(2, 10, clock=clock)

    assert limiter.hit("a").remaining == 1
    assert limiter.hit("a").allowed
    rejected = limiter.hit("a")
    assert not rejected.allowed
    assert rejected.retry_after == pytest.approx(10)

    clock.now += 10
    assert limiter.hit("a").allowed


def test_keys_are_limited_independently():
    limiter = SlidingWindowRateLimiter(1, 60, clock=FakeClock())

    assert limiter.hit("activity:1").allowed
    assert limiter.hit("activity:2").allowed
    assert not limiter.hit("activity:1").allowed


def test_reset_forgets_hits():
    limiter = SlidingWindowRateLimiter(1, 60, clock=FakeClock())
    limiter.hit("a")
    limiter.hit("b")

    limiter.reset("a")
    assert limiter.hit("a").allowed
    assert not limiter.hit("b").allowed

    limiter.reset()
    assert limiter.hit("b").allowed


@pytest.mark.parametrize(("limit", "window"), [(0, 10), (1, 0)])
def test_invalid_configuration_is_rejected(limit, window):
    with pytest.raises(ValueError):
        SlidingWindowRateLimiter(limit, window)


def test_expired_keys_are_evicted():
    clock = FakeClock()
    limiter = SlidingWindowRateLimiter(1, 10, clock=clock)
    for user_id in range(3):
        limiter.hit(f"messages:{user_id}")
    assert limiter.tracked_keys == 3

    clock.now += 10
    assert limiter.hit("messages:99").allowed

    assert limiter.tracked_keys == 1
