"""Client side activity telemetry."""

from __future__ import annotations

import httpx

from .activity_batcher import (
    ACTIVITY_BATCH_PATH,
    ACTIVITY_PATH,
    BATCH_DELAY,
    BATCH_SIZE,
    ActivityBatcher,
    Beacon,
    ClientBeacon,
)

DEFAULT_TIMEOUT = 10.0


def create_activity_batcher(
    base_url: str,
    *,
    access_token: str | None = None,
    beacon: Beacon | None = None,
    batch_size: int = BATCH_SIZE,
    batch_delay: float = BATCH_DELAY,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ActivityBatcher:
    """Build a batcher that owns its HTTP client.

    Callers must ``await batcher.aclose()`` (or use ``async with``) when the
    host shuts down so queued events reach the beacon.
    """

    headers = {"Authorization": f"Bearer {access_token}"} if access_token else None
    client = httpx.AsyncClient(
        base_url=base_url, headers=headers, timeout=timeout, transport=transport
    )
    return ActivityBatcher(
        client,
        beacon=beacon,
        batch_size=batch_size,
        batch_delay=batch_delay,
        owns_client=True,
    )


__all__ = [
    "ActivityBatcher",
    "Beacon",
    "ClientBeacon",
    "create_activity_batcher",
    "BATCH_SIZE",
    "BATCH_DELAY",
    "ACTIVITY_PATH",
    "ACTIVITY_BATCH_PATH",
]
