"""Behaviour of the client side activity batcher."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from splitfy.infrastructure.telemetry import (
    ACTIVITY_BATCH_PATH,
    ACTIVITY_PATH,
    create_activity_batcher,
)


class RecordingBeacon:
    def __init__(self, accept: bool = True) -> None:
        self.accept = accept
        self.calls: list[tuple[str, dict]] = []

    def send(self, url, payload):
        self.calls.append((url, payload))
        return self.accept


class ExplodingBeacon:
    def send(self, url, payload):
        raise RuntimeError("beacon unavailable")


class SinkRecorder:
    """Mock activity sink recording every request it receives."""

    def __init__(self, status_code: int = 201, fail_with: Exception | None = None) -> None:
        self.status_code = status_code
        self.fail_with = fail_with
        self.requests: list[tuple[str, dict]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.url.path, json.loads(request.content)))
        if self.fail_with is not None:
            raise self.fail_with
        return httpx.Response(self.status_code, json={"recorded": 1})

    def paths(self) -> list[str]:
        return [path for path, _ in self.requests]


def _build(sink: SinkRecorder, beacon=None, **kwargs):
    beacon = beacon if beacon is not None else RecordingBeacon()
    batcher = create_activity_batcher(
        "http://testserver",
        access_token="token",
        beacon=beacon,
        transport=httpx.MockTransport(sink),
        **kwargs,
    )
    return batcher, beacon


@pytest.mark.asyncio
@pytest.mark.parametrize("activity_type", ["login", "signup", "error", "payment"])
async def test_immediate_types_are_sent_alone(activity_type):
    sink = SinkRecorder()
    batcher, _ = _build(sink)

    await batcher.track(activity_type, {"source": "test"})

    assert sink.requests == [
        (ACTIVITY_PATH, {"activityType": activity_type, "activityData": {"source": "test"}})
    ]
    assert batcher.pending == ()
    await batcher.aclose()


@pytest.mark.asyncio
async def test_batchable_event_is_queued_without_request():
    sink = SinkRecorder()
    batcher, _ = _build(sink)

    await batcher.track("page_view", {"page": "/home"})

    assert sink.requests == []
    assert len(batcher.pending) == 1
    assert batcher.pending[0].activity_type == "page_view"
    assert batcher.timer_pending
    batcher.disable()
    await batcher.aclose()


@pytest.mark.asyncio
async def test_reaching_batch_size_flushes_everything_at_once():
    sink = SinkRecorder()
    batcher, _ = _build(sink)

    for index in range(10):
        await batcher.track("button_click", {"index": index})

    assert sink.paths() == [ACTIVITY_BATCH_PATH]
    body = sink.requests[0][1]
    assert [item["activityData"]["index"] for item in body["activities"]] == list(range(10))
    assert batcher.pending == ()
    assert not batcher.timer_pending
    await batcher.aclose()


@pytest.mark.asyncio
async def test_timer_flushes_partial_batch_once():
    sink = SinkRecorder()
    batcher, _ = _build(sink, batch_delay=0.05)

    for index in range(9):
        await batcher.track("page_view", {"index": index})
    assert sink.requests == []

    await asyncio.sleep(0.2)

    assert sink.paths() == [ACTIVITY_BATCH_PATH]
    assert len(sink.requests[0][1]["activities"]) == 9
    assert batcher.pending == ()
    await batcher.aclose()


@pytest.mark.asyncio
async def test_events_within_window_share_one_timer():
    sink = SinkRecorder()
    batcher, _ = _build(sink, batch_delay=0.05)

    await batcher.track("page_view")
    first_timer = batcher._timer
    await batcher.track("page_view")
    await batcher.track("form_submission")

    assert batcher._timer is first_timer
    await asyncio.sleep(0.2)

    assert sink.paths() == [ACTIVITY_BATCH_PATH]
    assert len(sink.requests[0][1]["activities"]) == 3
    await batcher.aclose()


@pytest.mark.asyncio
async def test_disabled_batcher_ignores_events_until_enabled():
    sink = SinkRecorder()
    batcher, _ = _build(sink)

    batcher.disable()
    await batcher.track("login")
    await batcher.track("page_view")
    assert sink.requests == []
    assert batcher.pending == ()

    batcher.enable()
    await batcher.track("login")
    assert sink.paths() == [ACTIVITY_PATH]
    await batcher.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "sink",
    [SinkRecorder(status_code=500), SinkRecorder(fail_with=httpx.ConnectError("down"))],
    ids=["server-error", "transport-error"],
)
async def test_failed_batch_is_dropped_without_raising(sink):
    batcher, beacon = _build(sink)

    for _ in range(10):
        await batcher.track("page_view")

    assert sink.paths() == [ACTIVITY_BATCH_PATH]
    assert batcher.pending == ()
    await batcher.flush()
    assert len(sink.requests) == 1
    await batcher.aclose()
    assert beacon.calls == []


@pytest.mark.asyncio
async def test_failed_immediate_event_is_swallowed():
    sink = SinkRecorder(status_code=503)
    batcher, _ = _build(sink)

    await batcher.track("error", {"error": "boom"})

    assert sink.paths() == [ACTIVITY_PATH]
    await batcher.aclose()


@pytest.mark.asyncio
async def test_before_unload_hands_queue_to_beacon():
    sink = SinkRecorder()
    batcher, beacon = _build(sink)

    await batcher.track("page_view", {"page": "/a"})
    await batcher.track("contract_action")
    batcher.before_unload()

    assert beacon.calls == [
        (
            ACTIVITY_PATH,
            {
                "activityType": "batch_unload",
                "activityData": {
                    "activities": [
                        {"activityType": "page_view", "activityData": {"page": "/a"}},
                        {"activityType": "contract_action"},
                    ]
                },
            },
        )
    ]
    assert batcher.pending == ()
    assert not batcher.timer_pending
    assert sink.requests == []

    batcher.before_unload()
    assert len(beacon.calls) == 1
    await batcher.aclose()


@pytest.mark.asyncio
async def test_before_unload_with_empty_queue_sends_nothing():
    sink = SinkRecorder()
    batcher, beacon = _build(sink)

    batcher.before_unload()

    assert beacon.calls == []
    await batcher.aclose()


@pytest.mark.asyncio
async def test_before_unload_never_raises():
    sink = SinkRecorder()
    batcher, _ = _build(sink, beacon=ExplodingBeacon())

    await batcher.track("page_view")
    batcher.before_unload()

    assert batcher.pending == ()
    await batcher.aclose()


@pytest.mark.asyncio
async def test_default_beacon_posts_unload_payload_on_close():
    sink = SinkRecorder()
    batcher = create_activity_batcher(
        "http://testserver", transport=httpx.MockTransport(sink)
    )

    async with batcher:
        await batcher.track("page_view", {"page": "/pricing"})

    assert not batcher.enabled
    assert sink.requests == [
        (
            ACTIVITY_PATH,
            {
                "activityType": "batch_unload",
                "activityData": {
                    "activities": [
                        {"activityType": "page_view", "activityData": {"page": "/pricing"}}
                    ]
                },
            },
        )
    ]


@pytest.mark.asyncio
async def test_helpers_add_timestamp_and_camel_case_keys():
    sink = SinkRecorder()
    batcher, beacon = _build(sink)

    await batcher.track_button_click("save", context="profile")
    await batcher.track_contract_action("sign", 42)
    await batcher.track_login()

    assert sink.paths() == [ACTIVITY_PATH]
    assert isinstance(sink.requests[0][1]["activityData"]["timestamp"], int)

    click, contract = batcher.pending
    assert click.activity_data["buttonId"] == "save"
    assert contract.activity_data["contractId"] == 42
    assert all("timestamp" in event.activity_data for event in batcher.pending)
    await batcher.aclose()
    assert len(beacon.calls) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("activity_type", ["", "  "])
async def test_empty_activity_type_is_ignored(activity_type):
    sink = SinkRecorder()
    batcher, beacon = _build(sink)

    await batcher.track(activity_type, {"page": "/home"})

    assert batcher.pending == ()
    assert not batcher.timer_pending
    assert sink.requests == []
    await batcher.aclose()
    assert beacon.calls == []


@pytest.mark.asyncio
async def test_events_tracked_during_flush_go_to_a_fresh_queue():
    release = asyncio.Event()
    requests: list[dict] = []

    async def slow_sink(request: httpx.Request) -> httpx.Response:
        requests.append(json.loads(request.content))
        await release.wait()
        return httpx.Response(201, json={"recorded": 10})

    batcher = create_activity_batcher(
        "http://testserver",
        beacon=RecordingBeacon(),
        transport=httpx.MockTransport(slow_sink),
    )

    for index in range(9):
        await batcher.track("page_view", {"index": index})
    in_flight = asyncio.create_task(batcher.track("page_view", {"index": 9}))
    while not requests:
        await asyncio.sleep(0)

    await batcher.track("page_view", {"index": 10})
    await batcher.track("page_view", {"index": 11})
    assert [event.activity_data["index"] for event in batcher.pending] == [10, 11]

    release.set()
    await in_flight

    assert len(requests) == 1
    assert [item["activityData"]["index"] for item in requests[0]["activities"]] == list(
        range(10)
    )
    assert [event.activity_data["index"] for event in batcher.pending] == [10, 11]
    assert batcher.timer_pending
    batcher.disable()
    await batcher.aclose()
