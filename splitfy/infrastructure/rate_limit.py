"""In-memory sliding window rate limiter."""

from __future__ import annotations

import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    retry_after: float = 0.0


class SlidingWindowRateLimiter:
    """Allow at most ``limit`` hits per key within ``window_seconds``.

    Request handlers run in a thread pool, so the per-key timestamps are
    guarded by a lock.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = threading.Lock()
        self._next_sweep = clock() + window_seconds

    @property
    def tracked_keys(self) -> int:
        return len(self._hits)

    def hit(self, key: str) -> RateLimitDecision:
        """Record a hit for ``key`` unless it would exceed the limit."""

        now = self._clock()
        cutoff = now - self.window_seconds
        with self._lock:
            if now >= self._next_sweep:
                self._evict_expired(cutoff)
                self._next_sweep = now + self.window_seconds
            hits = self._hits.setdefault(key, deque())
            _prune(hits, cutoff)
            if len(hits) >= self.limit:
                retry_after = max(hits[0] + self.window_seconds - now, 0.0)
                return RateLimitDecision(False, 0, retry_after)
            hits.append(now)
            return RateLimitDecision(True, self.limit - len(hits))

    def reset(self, key: str | None = None) -> None:
        with self._lock:
            if key is None:
                self._hits.clear()
            else:
                self._hits.pop(key, None)

    def _evict_expired(self, cutoff: float) -> None:
        for key in list(self._hits):
            hits = self._hits[key]
            _prune(hits, cutoff)
            if not hits:
                del self._hits[key]


def _prune(hits: deque[float], cutoff: float) -> None:
    while hits and hits[0] <= cutoff:
        hits.popleft()


__all__ = ["RateLimitDecision", "SlidingWindowRateLimiter"]
