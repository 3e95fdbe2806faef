"""Recommendation and match endpoints."""

from splitfy.infrastructure.repositories import NotificationRepository


def test_recommendations_rank_shared_skills(client, make_user, headers_for):
    requester = make_user(skills=["mixing", "mastering"])
    overlapping = make_user(skills=["mixing", "mastering"])
    make_user(skills=["drums"], is_active=False)

    response = client.get("/api/matches/recommendations", headers=headers_for(requester))

    assert response.status_code == 200
    (recommendation,) = response.json()
    assert recommendation["user"]["id"] == overlapping.id
    assert recommendation["match_score"] == 1.0
    assert recommendation["match_reason"] == "Shared skills: mixing, mastering"


def test_recommendations_limit(client, make_user, headers_for):
    requester = make_user(skills=["mixing"])
    for _ in range(5):
        make_user(skills=["vocals"])

    limited = client.get(
        "/api/matches/recommendations", params={"limit": 2}, headers=headers_for(requester)
    )
    empty = client.get(
        "/api/matches/recommendations", params={"limit": 0}, headers=headers_for(requester)
    )
    invalid = client.get(
        "/api/matches/recommendations", params={"limit": 101}, headers=headers_for(requester)
    )

    assert len(limited.json()) == 2
    assert all(0 <= item["match_score"] <= 1 for item in limited.json())
    assert empty.json() == []
    assert invalid.status_code == 422


def test_create_and_list_matches(client, make_user, headers_for):
    user = make_user()
    other = make_user()

    created = client.post(
        "/api/matches",
        json={"matched_user_id": other.id, "match_score": 0.75, "match_reason": "Shared skills"},
        headers=headers_for(user),
    )
    again = client.post(
        "/api/matches", json={"matched_user_id": other.id}, headers=headers_for(user)
    )
    listed = client.get("/api/matches", headers=headers_for(user))

    assert created.status_code == 201
    assert created.json()["status"] == "suggested"
    assert again.json()["id"] == created.json()["id"]
    (match,) = listed.json()
    assert match["matched_user"]["id"] == other.id
    assert match["match_score"] == 0.75


def test_matching_yourself_or_unknown_users_fails(client, make_user, headers_for):
    user = make_user()

    own = client.post("/api/matches", json={"matched_user_id": user.id}, headers=headers_for(user))
    unknown = client.post("/api/matches", json={"matched_user_id": 999}, headers=headers_for(user))

    assert own.status_code == 400
    assert unknown.status_code == 404


def test_connecting_notifies_matched_user(client, session, make_user, headers_for):
    user = make_user()
    other = make_user()
    match_id = client.post(
        "/api/matches", json={"matched_user_id": other.id}, headers=headers_for(user)
    ).json()["id"]

    stranger = client.patch(
        f"/api/matches/{match_id}", json={"status": "connected"}, headers=headers_for(other)
    )
    response = client.patch(
        f"/api/matches/{match_id}", json={"status": "connected"}, headers=headers_for(user)
    )
    filtered = client.get(
        "/api/matches", params={"status": "connected"}, headers=headers_for(user)
    )
    invalid_filter = client.get(
        "/api/matches", params={"status": "unknown"}, headers=headers_for(user)
    )

    assert stranger.status_code == 403
    assert response.status_code == 200
    assert response.json()["status"] == "connected"
    assert [m["id"] for m in filtered.json()] == [match_id]
    assert invalid_filter.status_code == 400
    (notification,) = NotificationRepository(session).list_for_user(other.id)
    assert notification.title == "New connection"
