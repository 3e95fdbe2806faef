"""Realtime delivery of notifications and chat messages."""

import asyncio

import pytest

from splitfy.domain.entities import Message, Notification
from splitfy.infrastructure.notifications import (
    ConnectionManager,
    RealtimePublisher,
    serialize_message,
)


class FakeWebSocket:
    def __init__(self, broken: bool = False) -> None:
        self.broken = broken
        self.accepted = False
        self.sent: list[dict] = []

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, message) -> None:
        if self.broken:
            raise RuntimeError("socket closed")
        self.sent.append(message)


@pytest.mark.asyncio
async def test_dispatch_reaches_connected_user_only():
    manager = ConnectionManager()
    publisher = RealtimePublisher(manager)
    websocket = FakeWebSocket()
    await manager.connect(7, websocket)
    notification = Notification(id=1, user_id=7, title="Hi", content="Hello")

    publisher.dispatch(7, event_type="notification", payload={"id": notification.id})
    publisher.dispatch(8, event_type="notification", payload={"id": 2})
    await asyncio.sleep(0)

    assert websocket.accepted
    assert websocket.sent == [{"type": "notification", "data": {"id": 1}}]


@pytest.mark.asyncio
async def test_broken_sockets_are_dropped():
    manager = ConnectionManager()
    await manager.connect(3, FakeWebSocket(broken=True))

    await manager.send_to_user(3, {"type": "ping"})

    assert not manager.is_connected(3)


@pytest.mark.asyncio
async def test_dispatch_many_skips_duplicates():
    manager = ConnectionManager()
    publisher = RealtimePublisher(manager)
    websocket = FakeWebSocket()
    await manager.connect(5, websocket)

    publisher.dispatch_many([5, 5, 0], event_type="message", payload={"n": 1})
    await asyncio.sleep(0)

    assert len(websocket.sent) == 1


def test_dispatch_without_connections_is_a_no_op():
    publisher = RealtimePublisher(ConnectionManager())

    publisher.dispatch(1, event_type="notification", payload={})


def test_serialize_message():
    message = Message(id=4, sender_id=1, receiver_id=2, content="Hey")

    payload = serialize_message(message)

    assert payload["id"] == 4
    assert payload["content"] == "Hey"
    assert payload["created_at"] is None
