"""Contract, collaborator and signature endpoints."""

import pytest

from splitfy.application.use_cases.contracts import seed_default_templates
from splitfy.infrastructure import email as email_module
from splitfy.infrastructure.repositories import ActivityRepository, NotificationRepository


@pytest.fixture()
def sent_emails(monkeypatch):
    sent = []

    def fake_send_email(subject, html_content, recipient):
        sent.append(recipient)
        return True

    monkeypatch.setattr(email_module, "send_email", fake_send_email)
    return sent


def _create_contract(client, headers, **overrides):
    payload = {"title": "Summer single", "type": "split-sheet", "data": {"song": "Summer"}}
    payload.update(overrides)
    return client.post("/api/contracts", json=payload, headers=headers)


def _add_collaborator(client, headers, contract_id, **payload):
    payload.setdefault("name", "Guest")
    payload.setdefault("role", "Writer")
    return client.post(
        f"/api/contracts/{contract_id}/collaborators", json=payload, headers=headers
    )


def test_templates_are_seeded_once(client, session, make_user, headers_for):
    user = make_user()
    first = seed_default_templates(session)
    second = seed_default_templates(session)

    response = client.get("/api/contract-templates", headers=headers_for(user))

    assert len(first) == 4
    assert second == []
    assert sorted(t["type"] for t in response.json()) == [
        "management",
        "performance",
        "producer",
        "split-sheet",
    ]
    template_id = response.json()[0]["id"]
    detail = client.get(f"/api/contract-templates/{template_id}", headers=headers_for(user))
    assert detail.status_code == 200
    assert client.get("/api/contract-templates/999", headers=headers_for(user)).status_code == 404


def test_template_type_must_match_contract(client, session, make_user, headers_for):
    user = make_user()
    templates = {t.type: t for t in seed_default_templates(session)}

    mismatch = _create_contract(
        client, headers_for(user), template_id=templates["producer"].id
    )
    matching = _create_contract(
        client, headers_for(user), template_id=templates["split-sheet"].id
    )

    assert mismatch.status_code == 400
    assert matching.status_code == 201


def test_unknown_contract_type_is_rejected(client, make_user, headers_for):
    user = make_user()

    assert _create_contract(client, headers_for(user), type="lease").status_code == 422


def test_contract_visibility_and_ownership(client, make_user, headers_for, sent_emails):
    creator = make_user()
    collaborator = make_user()
    outsider = make_user()
    contract_id = _create_contract(client, headers_for(creator)).json()["id"]
    _add_collaborator(client, headers_for(creator), contract_id, user_id=collaborator.id)

    seen = client.get(f"/api/contracts/{contract_id}", headers=headers_for(collaborator))
    hidden = client.get(f"/api/contracts/{contract_id}", headers=headers_for(outsider))
    edit = client.patch(
        f"/api/contracts/{contract_id}", json={"title": "Mine"}, headers=headers_for(collaborator)
    )
    listed = client.get("/api/contracts", headers=headers_for(collaborator))

    assert seen.status_code == 200
    assert hidden.status_code == 403
    assert edit.status_code == 403
    assert [c["id"] for c in listed.json()] == [contract_id]


def test_update_and_delete_contract(client, make_user, headers_for):
    creator = make_user()
    contract_id = _create_contract(client, headers_for(creator), metadata={"bpm": 120}).json()["id"]

    updated = client.patch(
        f"/api/contracts/{contract_id}",
        json={"title": "Renamed", "status": "pending"},
        headers=headers_for(creator),
    )
    deleted = client.delete(f"/api/contracts/{contract_id}", headers=headers_for(creator))
    missing = client.get(f"/api/contracts/{contract_id}", headers=headers_for(creator))

    assert updated.json()["title"] == "Renamed"
    assert updated.json()["status"] == "pending"
    assert updated.json()["metadata"] == {"bpm": 120}
    assert deleted.status_code == 204
    assert missing.status_code == 404


def test_adding_collaborators_invites_and_notifies(client, session, make_user, headers_for, sent_emails):
    creator = make_user()
    registered = make_user(email="artist@example.com")
    contract_id = _create_contract(client, headers_for(creator)).json()["id"]

    by_email = _add_collaborator(
        client,
        headers_for(creator),
        contract_id,
        email="artist@example.com",
        ownership_percentage="60",
    )
    guest = _add_collaborator(
        client,
        headers_for(creator),
        contract_id,
        email="guest@example.com",
        ownership_percentage="30",
    )
    duplicate = _add_collaborator(client, headers_for(creator), contract_id, user_id=registered.id)
    too_much = _add_collaborator(
        client, headers_for(creator), contract_id, name="Late", ownership_percentage="20"
    )

    assert by_email.status_code == 201
    assert by_email.json()["user_id"] == registered.id
    assert guest.json()["user_id"] is None
    assert duplicate.status_code == 400
    assert too_much.status_code == 400
    assert sent_emails == ["artist@example.com", "guest@example.com"]
    (notification,) = NotificationRepository(session).list_for_user(registered.id)
    assert notification.title == "Contract invitation"

    listed = client.get(f"/api/contracts/{contract_id}/collaborators", headers=headers_for(creator))
    assert [c["name"] for c in listed.json()] == ["Guest", "Guest"]


def test_signing_flow_closes_contract(client, session, make_user, headers_for, sent_emails):
    creator = make_user()
    artist = make_user()
    contract_id = _create_contract(client, headers_for(creator)).json()["id"]
    registered = _add_collaborator(
        client, headers_for(creator), contract_id, user_id=artist.id
    ).json()
    unregistered = _add_collaborator(
        client, headers_for(creator), contract_id, email="guest@example.com"
    ).json()

    wrong_signer = client.post(
        f"/api/contracts/{contract_id}/signatures",
        json={"collaborator_id": registered["id"]},
        headers=headers_for(creator),
    )
    first = client.post(
        f"/api/contracts/{contract_id}/signatures",
        json={"collaborator_id": registered["id"], "signature_data": "sig-artist"},
        headers=headers_for(artist),
    )
    repeated = client.post(
        f"/api/contracts/{contract_id}/signatures",
        json={"collaborator_id": registered["id"]},
        headers=headers_for(artist),
    )
    pending = client.get(f"/api/contracts/{contract_id}", headers=headers_for(creator)).json()
    second = client.post(
        f"/api/contracts/{contract_id}/signatures",
        json={"collaborator_id": unregistered["id"]},
        headers=headers_for(creator),
    )
    signed = client.get(f"/api/contracts/{contract_id}", headers=headers_for(creator)).json()
    signatures = client.get(
        f"/api/contracts/{contract_id}/signatures", headers=headers_for(artist)
    ).json()

    assert wrong_signer.status_code == 403
    assert first.status_code == 201
    assert first.json()["signature_data"] == "sig-artist"
    assert repeated.status_code == 400
    assert pending["status"] == "pending"
    assert second.status_code == 201
    assert signed["status"] == "signed"
    assert all(c["status"] == "signed" for c in signed["collaborators"])
    assert len(signatures) == 2
    titles = [n.title for n in NotificationRepository(session).list_for_user(creator.id)]
    assert "Contract signed" in titles
    activity_types = {a.activity_type for a in ActivityRepository(session).list_recent()}
    assert activity_types == {"contract_signed"}


def test_dashboard_stats(client, make_user, headers_for, sent_emails):
    creator = make_user()
    _create_contract(client, headers_for(creator))
    _create_contract(client, headers_for(creator), status="pending")
    contract_id = _create_contract(client, headers_for(creator)).json()["id"]
    collaborator_id = _add_collaborator(
        client, headers_for(creator), contract_id, email="guest@example.com"
    ).json()["id"]
    client.post(
        f"/api/contracts/{contract_id}/signatures",
        json={"collaborator_id": collaborator_id},
        headers=headers_for(creator),
    )

    response = client.get("/api/dashboard/stats", headers=headers_for(creator))

    assert response.json() == {
        "total_contracts": 3,
        "pending_signatures": 1,
        "completed_this_month": 1,
        "revenue_split": 100,
    }
