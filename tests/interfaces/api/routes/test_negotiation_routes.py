"""Negotiation endpoints and the background message analysis."""

import pytest

from splitfy.domain.entities import NegotiationAnalysis
from splitfy.infrastructure.repositories import NotificationRepository
from splitfy.interfaces.api.dependencies import get_negotiation_analysis_service


class FakeAnalyzer:
    def __init__(self, analysis=None, error=None):
        self.analysis = analysis or NegotiationAnalysis(
            sentiment_score=0.4,
            summary="Open to a 50/50 split",
            key_points=["split"],
            suggested_reply="Happy to go 50/50.",
        )
        self.error = error
        self.calls = []

    def analyze(self, message, *, negotiation_title, history=()):
        self.calls.append((message, negotiation_title, list(history)))
        if self.error is not None:
            raise self.error
        return self.analysis


@pytest.fixture()
def use_analyzer(app):
    def install(analyzer):
        app.dependency_overrides[get_negotiation_analysis_service] = lambda: analyzer
        return analyzer

    yield install
    app.dependency_overrides.clear()


def _create(client, headers, **overrides):
    payload = {"title": "Summer single split", "participants": []}
    payload.update(overrides)
    return client.post("/api/negotiations", json=payload, headers=headers)


def test_create_negotiation_notifies_participants(client, session, make_user, headers_for):
    creator = make_user()
    participant = make_user()

    response = _create(client, headers_for(creator), participants=[participant.id, creator.id])

    assert response.status_code == 201
    body = response.json()
    assert body["participants"] == [participant.id]
    assert body["status"] == "active"
    (notification,) = NotificationRepository(session).list_for_user(participant.id)
    assert notification.action_url == f"/negotiations/{body['id']}"


def test_unknown_participants_are_rejected(client, make_user, headers_for):
    creator = make_user()

    response = _create(client, headers_for(creator), participants=[999])

    assert response.status_code == 404


def test_access_is_limited_to_creator_and_participants(client, make_user, headers_for):
    creator = make_user()
    participant = make_user()
    outsider = make_user()
    negotiation_id = _create(
        client, headers_for(creator), participants=[participant.id]
    ).json()["id"]

    assert client.get(f"/api/negotiations/{negotiation_id}", headers=headers_for(participant)).status_code == 200
    assert client.get(f"/api/negotiations/{negotiation_id}", headers=headers_for(outsider)).status_code == 403
    assert client.get("/api/negotiations/999", headers=headers_for(creator)).status_code == 404
    assert [n["id"] for n in client.get("/api/negotiations", headers=headers_for(participant)).json()] == [negotiation_id]
    assert client.get("/api/negotiations", headers=headers_for(outsider)).json() == []


def test_only_creator_can_update(client, make_user, headers_for):
    creator = make_user()
    participant = make_user()
    negotiation_id = _create(
        client, headers_for(creator), participants=[participant.id]
    ).json()["id"]

    denied = client.patch(
        f"/api/negotiations/{negotiation_id}",
        json={"status": "completed"},
        headers=headers_for(participant),
    )
    updated = client.patch(
        f"/api/negotiations/{negotiation_id}",
        json={"status": "completed", "outcome": {"split": "50/50"}},
        headers=headers_for(creator),
    )

    assert denied.status_code == 403
    assert updated.status_code == 200
    assert updated.json()["status"] == "completed"
    assert updated.json()["outcome"] == {"split": "50/50"}


def test_posted_message_is_analysed_in_background(client, make_user, headers_for, use_analyzer):
    analyzer = use_analyzer(FakeAnalyzer())
    creator = make_user()
    negotiation_id = _create(client, headers_for(creator)).json()["id"]

    posted = client.post(
        f"/api/negotiations/{negotiation_id}/messages",
        json={"message": "Would you accept 50/50?"},
        headers=headers_for(creator),
    )
    messages = client.get(
        f"/api/negotiations/{negotiation_id}/messages", headers=headers_for(creator)
    ).json()

    assert posted.status_code == 201
    assert analyzer.calls[0][:2] == ("Would you accept 50/50?", "Summer single split")
    original, suggestion = messages
    assert original["sentiment_score"] == 0.4
    assert original["ai_analysis"]["summary"] == "Open to a 50/50 split"
    assert suggestion["message_type"] == "ai_suggestion"
    assert suggestion["message"] == "Happy to go 50/50."


def test_analysis_failure_leaves_message_untouched(client, make_user, headers_for, use_analyzer):
    use_analyzer(FakeAnalyzer(error=RuntimeError("model unavailable")))
    creator = make_user()
    negotiation_id = _create(client, headers_for(creator)).json()["id"]

    posted = client.post(
        f"/api/negotiations/{negotiation_id}/messages",
        json={"message": "Final offer"},
        headers=headers_for(creator),
    )
    messages = client.get(
        f"/api/negotiations/{negotiation_id}/messages", headers=headers_for(creator)
    ).json()

    assert posted.status_code == 201
    assert len(messages) == 1
    assert messages[0]["sentiment_score"] is None


def test_unconfigured_assistant_skips_analysis(client, make_user, headers_for, use_analyzer):
    use_analyzer(None)
    creator = make_user()
    negotiation_id = _create(client, headers_for(creator)).json()["id"]

    posted = client.post(
        f"/api/negotiations/{negotiation_id}/messages",
        json={"message": "Hello"},
        headers=headers_for(creator),
    )

    assert posted.status_code == 201
    assert posted.json()["sentiment_score"] is None


def test_disabled_assistant_and_closed_negotiations(client, make_user, headers_for, use_analyzer):
    analyzer = use_analyzer(FakeAnalyzer())
    creator = make_user()
    negotiation_id = _create(
        client, headers_for(creator), ai_assistant_enabled=False
    ).json()["id"]

    client.post(
        f"/api/negotiations/{negotiation_id}/messages",
        json={"message": "No assistant please"},
        headers=headers_for(creator),
    )
    client.patch(
        f"/api/negotiations/{negotiation_id}",
        json={"status": "cancelled"},
        headers=headers_for(creator),
    )
    closed = client.post(
        f"/api/negotiations/{negotiation_id}/messages",
        json={"message": "Anyone?"},
        headers=headers_for(creator),
    )

    assert analyzer.calls == []
    assert closed.status_code == 400
