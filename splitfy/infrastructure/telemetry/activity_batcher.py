"""Client side batching of activity events.

Events in :data:`IMMEDIATE_ACTIVITY_TYPES` are posted one by one as soon as
they are tracked. Everything else is queued and delivered as a single batch
once ``batch_size`` events have accumulated or ``batch_delay`` seconds have
passed since the first queued event, whichever happens first. Delivery is
at-most-once: a failed request is logged and the events are dropped.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import time
from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from splitfy.domain.entities import BATCH_UNLOAD_ACTIVITY_TYPE, ActivityEvent

logger = logging.getLogger(__name__)

BATCH_SIZE = 10
BATCH_DELAY = 5.0
ACTIVITY_PATH = "/api/activity"
ACTIVITY_BATCH_PATH = "/api/activity/batch"


class DeliveryStatus(enum.Enum):
    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"


class Beacon(Protocol):
    """Fire-and-forget transport used while the host is shutting down."""

    def send(self, url: str, payload: Mapping[str, Any]) -> bool:
        """Queue ``payload`` for delivery without blocking; ``True`` when accepted."""


class ClientBeacon:
    """Beacon that schedules a background POST on the running event loop."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client
        self._pending: set[asyncio.Task[None]] = set()

    def send(self, url: str, payload: Mapping[str, Any]) -> bool:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; dropping beacon to %s", url)
            return False
        task = loop.create_task(self._post(url, dict(payload)))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return True

    async def _post(self, url: str, payload: dict[str, Any]) -> None:
        try:
            response = await self._client.post(url, json=payload)
            response.raise_for_status()
        except Exception as exc:
            logger.warning("Beacon delivery to %s failed: %s", url, exc)

    async def drain(self) -> None:
        """Wait for every beacon handed out so far."""

        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


class ActivityBatcher:
    """Collect activity events and deliver them to the activity sink."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        beacon: Beacon | None = None,
        batch_size: int = BATCH_SIZE,
        batch_delay: float = BATCH_DELAY,
        owns_client: bool = False,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if batch_delay < 0:
            raise ValueError("batch_delay cannot be negative")
        self._client = client
        self._beacon: Beacon = beacon if beacon is not None else ClientBeacon(client)
        self._batch_size = batch_size
        self._batch_delay = batch_delay
        self._owns_client = owns_client
        self._enabled = True
        self._queue: list[ActivityEvent] = []
        self._timer: asyncio.TimerHandle | None = None
        self._flush_tasks: set[asyncio.Task[None]] = set()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def pending(self) -> tuple[ActivityEvent, ...]:
        """Snapshot of the events waiting for the next flush."""

        return tuple(self._queue)

    @property
    def timer_pending(self) -> bool:
        return self._timer is not None

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    async def track(
        self, activity_type: str, activity_data: Mapping[str, Any] | None = None
    ) -> None:
        """Record an event, sending or queueing it depending on its type."""

        if not self._enabled:
            return

        try:
            event = ActivityEvent(activity_type, activity_data)
        except ValueError as exc:
            logger.warning("Ignoring activity %r: %s", activity_type, exc)
            return
        if event.is_immediate:
            await self._send_immediately(event)
            return

        self._queue.append(event)
        if len(self._queue) >= self._batch_size:
            await self.flush()
        elif self._timer is None:
            loop = asyncio.get_running_loop()
            self._timer = loop.call_later(self._batch_delay, self._on_timer)

    async def flush(self) -> None:
        """Deliver every queued event as one batch request."""

        batch = self._take_batch()
        if not batch:
            return
        status = await self._send_batch(batch)
        logger.debug("Activity batch of %d events: %s", len(batch), status.value)

    def before_unload(self) -> None:
        """Hand queued events to the beacon without waiting for delivery."""

        batch = self._take_batch()
        if not batch:
            return
        payload = {
            "activityType": BATCH_UNLOAD_ACTIVITY_TYPE,
            "activityData": {"activities": [event.to_payload() for event in batch]},
        }
        try:
            accepted = self._beacon.send(ACTIVITY_PATH, payload)
        except Exception as exc:
            logger.warning("Failed to hand %d activities to the beacon: %s", len(batch), exc)
            return
        if not accepted:
            logger.warning("Beacon refused %d activities", len(batch))

    def dispose(self) -> None:
        """Deliver what is queued through the beacon and stop tracking."""

        self.before_unload()
        self.disable()

    async def aclose(self) -> None:
        """Dispose the batcher and wait for background deliveries."""

        self.dispose()
        if self._flush_tasks:
            await asyncio.gather(*list(self._flush_tasks), return_exceptions=True)
        drain = getattr(self._beacon, "drain", None)
        if drain is not None:
            await drain()
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ActivityBatcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def track_page_view(self, page: str) -> None:
        await self.track("page_view", {"page": page, "timestamp": _timestamp()})

    async def track_button_click(self, button_id: str, context: str | None = None) -> None:
        await self.track(
            "button_click",
            {"buttonId": button_id, "context": context, "timestamp": _timestamp()},
        )

    async def track_form_submission(self, form_type: str, success: bool) -> None:
        await self.track(
            "form_submission",
            {"formType": form_type, "success": success, "timestamp": _timestamp()},
        )

    async def track_contract_action(self, action: str, contract_id: int | str) -> None:
        await self.track(
            "contract_action",
            {"action": action, "contractId": contract_id, "timestamp": _timestamp()},
        )

    async def track_profile_action(
        self, action: str, profile_data: Mapping[str, Any] | None = None
    ) -> None:
        await self.track(
            "profile_action",
            {
                "action": action,
                "profileData": dict(profile_data) if profile_data is not None else None,
                "timestamp": _timestamp(),
            },
        )

    async def track_login(self) -> None:
        await self.track("login", {"timestamp": _timestamp()})

    async def track_signup(self) -> None:
        await self.track("signup", {"timestamp": _timestamp()})

    async def track_error(self, error: str, context: str | None = None) -> None:
        await self.track(
            "error", {"error": error, "context": context, "timestamp": _timestamp()}
        )

    def _on_timer(self) -> None:
        self._timer = None
        task = asyncio.get_running_loop().create_task(self.flush())
        self._flush_tasks.add(task)
        task.add_done_callback(self._flush_tasks.discard)

    def _take_batch(self) -> list[ActivityEvent]:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if not self._queue:
            return []
        batch, self._queue = self._queue, []
        return batch

    async def _send_immediately(self, event: ActivityEvent) -> DeliveryStatus:
        try:
            response = await self._client.post(ACTIVITY_PATH, json=event.to_payload())
            response.raise_for_status()
        except Exception as exc:
            logger.warning("Failed to track %s activity: %s", event.activity_type, exc)
            return DeliveryStatus.FAILED
        return DeliveryStatus.SENT

    async def _send_batch(self, batch: list[ActivityEvent]) -> DeliveryStatus:
        if not batch:
            return DeliveryStatus.SKIPPED
        body = {"activities": [event.to_payload() for event in batch]}
        try:
            response = await self._client.post(ACTIVITY_BATCH_PATH, json=body)
            response.raise_for_status()
        except Exception as exc:
            logger.warning("Failed to send batch of %d activities: %s", len(batch), exc)
            return DeliveryStatus.FAILED
        return DeliveryStatus.SENT


def _timestamp() -> int:
    return int(time.time() * 1000)


__all__ = [
    "ActivityBatcher",
    "Beacon",
    "ClientBeacon",
    "BATCH_SIZE",
    "BATCH_DELAY",
    "ACTIVITY_PATH",
    "ACTIVITY_BATCH_PATH",
]
