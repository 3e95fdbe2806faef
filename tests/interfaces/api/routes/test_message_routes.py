"""Direct messaging endpoints."""

from splitfy.infrastructure.repositories import ActivityRepository
from splitfy.interfaces.api.dependencies import get_rate_limiter


def _send(client, headers, receiver_id, content="Hello"):
    return client.post(
        "/api/messages",
        json={"receiver_id": receiver_id, "content": content},
        headers=headers,
    )


def test_send_message_records_activity(client, session, make_user, headers_for):
    sender = make_user()
    receiver = make_user()

    response = _send(client, headers_for(sender), receiver.id, "  Hi there ")

    assert response.status_code == 201
    body = response.json()
    assert body["content"] == "Hi there"
    assert body["is_read"] is False
    (activity,) = ActivityRepository(session).list_recent(user_id=sender.id)
    assert activity.activity_type == "message_sent"
    assert activity.activity_data == {"receiverId": receiver.id}


def test_send_message_validation(client, make_user, headers_for):
    sender = make_user()

    assert _send(client, headers_for(sender), sender.id).status_code == 400
    assert _send(client, headers_for(sender), 999).status_code == 404
    assert _send(client, headers_for(sender), sender.id, "").status_code == 422


def test_conversations_show_latest_message_and_unread_count(client, make_user, headers_for):
    me = make_user()
    first = make_user()
    second = make_user()
    _send(client, headers_for(first), me.id, "one")
    _send(client, headers_for(first), me.id, "two")
    _send(client, headers_for(me), second.id, "three")

    response = client.get("/api/conversations", headers=headers_for(me))

    assert response.status_code == 200
    conversations = {c["partner"]["id"]: c for c in response.json()}
    assert conversations[first.id]["unread_count"] == 2
    assert conversations[first.id]["latest_message"]["content"] == "two"
    assert conversations[second.id]["unread_count"] == 0
    assert conversations[second.id]["latest_message"]["content"] == "three"


def test_conversation_is_newest_first_and_can_be_marked_read(client, make_user, headers_for):
    me = make_user()
    partner = make_user()
    for content in ("a", "b", "c"):
        _send(client, headers_for(partner), me.id, content)

    history = client.get(
        f"/api/conversations/{partner.id}", params={"limit": 2}, headers=headers_for(me)
    )
    marked = client.patch(f"/api/conversations/{partner.id}/read", headers=headers_for(me))
    after = client.get("/api/conversations", headers=headers_for(me))

    assert [m["content"] for m in history.json()] == ["c", "b"]
    assert marked.json() == {"updated": 3}
    assert after.json()[0]["unread_count"] == 0


def test_message_rate_limit(client, make_user, headers_for):
    sender = make_user()
    receiver = make_user()
    limiter = get_rate_limiter("messages")
    for _ in range(limiter.limit):
        limiter.hit(f"messages:{sender.id}")

    response = _send(client, headers_for(sender), receiver.id)

    assert response.status_code == 429
