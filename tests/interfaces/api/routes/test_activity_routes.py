"""Activity sink endpoints."""

from splitfy.infrastructure.repositories import ActivityRepository
from splitfy.interfaces.api.dependencies import get_rate_limiter


def test_single_activity_is_stored_with_client_details(client, session, make_user, headers_for):
    user = make_user()

    response = client.post(
        "/api/activity",
        json={"activityType": "page_view", "activityData": {"page": "/home"}},
        headers={**headers_for(user), "User-Agent": "pytest-agent"},
    )

    assert response.status_code == 201
    assert response.json() == {"recorded": 1}
    (activity,) = ActivityRepository(session).list_recent(user_id=user.id)
    assert activity.activity_type == "page_view"
    assert activity.activity_data == {"page": "/home"}
    assert activity.user_agent == "pytest-agent"
    assert activity.ip_address


def test_unload_beacon_is_unpacked_into_rows(client, session, make_user, headers_for):
    user = make_user()
    payload = {
        "activityType": "batch_unload",
        "activityData": {
            "activities": [
                {"activityType": "page_view", "activityData": {"page": "/a"}},
                {"activityType": "button_click"},
            ]
        },
    }

    response = client.post("/api/activity", json=payload, headers=headers_for(user))

    assert response.status_code == 201
    assert response.json() == {"recorded": 2}
    types = sorted(a.activity_type for a in ActivityRepository(session).list_recent())
    assert types == ["button_click", "page_view"]


def test_malformed_unload_beacon_is_rejected(client, make_user, headers_for):
    user = make_user()

    response = client.post(
        "/api/activity",
        json={"activityType": "batch_unload", "activityData": {"activities": "nope"}},
        headers=headers_for(user),
    )

    assert response.status_code == 400


def test_batch_is_stored(client, session, make_user, headers_for):
    user = make_user()
    activities = [
        {"activityType": "page_view", "activityData": {"index": index}} for index in range(3)
    ]

    response = client.post(
        "/api/activity/batch", json={"activities": activities}, headers=headers_for(user)
    )

    assert response.status_code == 201
    assert response.json() == {"recorded": 3}
    assert len(ActivityRepository(session).list_recent(user_id=user.id)) == 3


def test_empty_batch_is_a_no_op(client, make_user, headers_for):
    user = make_user()

    response = client.post("/api/activity/batch", json={"activities": []}, headers=headers_for(user))

    assert response.status_code == 201
    assert response.json() == {"recorded": 0}


def test_oversized_batch_and_long_types_are_rejected(client, make_user, headers_for):
    user = make_user()
    too_many = [{"activityType": "page_view"}] * 101

    assert (
        client.post(
            "/api/activity/batch", json={"activities": too_many}, headers=headers_for(user)
        ).status_code
        == 422
    )
    assert (
        client.post(
            "/api/activity", json={"activityType": "x" * 51}, headers=headers_for(user)
        ).status_code
        == 422
    )


def test_activity_requires_authentication(client):
    response = client.post("/api/activity", json={"activityType": "page_view"})

    assert response.status_code == 401


def test_invalid_token_is_rejected(client):
    response = client.post(
        "/api/activity",
        json={"activityType": "page_view"},
        headers={"Authorization": "Bearer not-a-token"},
    )

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_activity_rate_limit(client, make_user, headers_for):
    user = make_user()
    limiter = get_rate_limiter("activity")
    for _ in range(limiter.limit):
        limiter.hit(f"activity:{user.id}")

    response = client.post(
        "/api/activity", json={"activityType": "page_view"}, headers=headers_for(user)
    )

    assert response.status_code == 429
    assert int(response.headers["Retry-After"]) >= 1


def test_admin_activity_log(client, make_user, headers_for):
    admin = make_user(role="admin")
    user = make_user(first_name="Ana", last_name="Lopez")
    client.post("/api/activity", json={"activityType": "page_view"}, headers=headers_for(user))

    forbidden = client.get("/api/admin/activity", headers=headers_for(user))
    response = client.get("/api/admin/activity", headers=headers_for(admin))

    assert forbidden.status_code == 403
    assert response.status_code == 200
    (entry,) = response.json()
    assert entry["user_name"] == "Ana Lopez"
    assert entry["user_email"] == user.email
