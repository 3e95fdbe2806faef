"""Notification endpoints and the realtime websocket."""

import pytest
from starlette.websockets import WebSocketDisconnect

from splitfy.application.use_cases.notifications import notify_user
from splitfy.infrastructure.security import create_access_token


def test_list_and_mark_notifications(client, session, make_user, headers_for):
    user = make_user()
    other = make_user()
    first = notify_user(session, user_id=user.id, title="One", content="First")
    notify_user(session, user_id=user.id, title="Two", content="Second", type="success")
    foreign = notify_user(session, user_id=other.id, title="Other", content="Hidden")

    listed = client.get("/api/notifications", headers=headers_for(user))
    marked = client.patch(f"/api/notifications/{first.id}/read", headers=headers_for(user))
    denied = client.patch(f"/api/notifications/{foreign.id}/read", headers=headers_for(user))
    unread = client.get(
        "/api/notifications", params={"unread_only": True}, headers=headers_for(user)
    )
    all_read = client.patch("/api/notifications/read-all", headers=headers_for(user))

    assert [n["title"] for n in listed.json()] == ["Two", "One"]
    assert marked.json()["is_read"] is True
    assert denied.status_code == 403
    assert [n["title"] for n in unread.json()] == ["Two"]
    assert all_read.json() == {"updated": 1}


def test_websocket_sends_pending_notifications(client, session, make_user):
    user = make_user()
    notify_user(session, user_id=user.id, title="Welcome", content="Hi")
    token = create_access_token({"sub": str(user.id)})

    with client.websocket_connect(f"/api/notifications/ws?token={token}") as websocket:
        init = websocket.receive_json()
        websocket.send_json({"type": "ping"})
        pong = websocket.receive_json()

    assert init["type"] == "init"
    assert [n["title"] for n in init["data"]] == ["Welcome"]
    assert pong == {"type": "pong"}


@pytest.mark.parametrize("query", ["", "?token=invalid"])
def test_websocket_rejects_missing_or_invalid_token(client, query):
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect(f"/api/notifications/ws{query}") as websocket:
            websocket.receive_json()
