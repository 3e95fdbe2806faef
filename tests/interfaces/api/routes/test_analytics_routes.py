"""Analytics and user administration endpoints."""

from splitfy.application.use_cases.analytics import growth_rate


def _login(client, headers):
    client.post("/api/activity", json={"activityType": "login"}, headers=headers)


def test_user_analytics_is_scoped_to_caller(client, make_user, headers_for):
    me = make_user(skills=["mixing"], contact_info={"location": "Lima", "phone": "1"})
    friend = make_user(skills=["mixing", "drums"], contact_info={"location": "Lima"})
    _login(client, headers_for(me))
    _login(client, headers_for(friend))
    client.post(
        "/api/messages", json={"receiver_id": friend.id, "content": "hi"}, headers=headers_for(me)
    )
    client.get(f"/api/users/{me.id}/profile", headers=headers_for(friend))

    response = client.get("/api/analytics", headers=headers_for(me))

    assert response.status_code == 200
    body = response.json()
    assert body["user_stats"] == {
        "total_users": 1,
        "active_users": 1,
        "new_users_today": 1,
        "user_growth_rate": 0,
    }
    activity = body["activity_stats"]
    assert len(activity["daily_logins"]) == 30
    assert activity["daily_logins"][-1]["count"] == 1
    assert activity["messages_sent"][-1]["count"] == 1
    assert activity["profile_views"][-1]["count"] == 1
    assert sum(day["count"] for day in activity["daily_logins"]) == 1
    engagement = body["user_engagement"]
    assert engagement["top_skills"][0] == {"skill": "mixing", "count": 2}
    assert engagement["users_by_location"] == [{"location": "Lima", "count": 2}]
    buckets = {b["range"]: b["count"] for b in engagement["profile_completeness"]}
    assert buckets == {"0-25%": 1, "26-50%": 1, "51-75%": 0, "76-100%": 0}


def test_global_analytics_requires_admin(client, make_user, headers_for):
    admin = make_user(role="admin")
    user = make_user()
    _login(client, headers_for(user))
    _login(client, headers_for(user))
    _login(client, headers_for(admin))

    denied = client.get("/api/analytics/global", headers=headers_for(user))
    response = client.get("/api/analytics/global", headers=headers_for(admin))

    assert denied.status_code == 403
    stats = response.json()["user_stats"]
    assert stats["total_users"] == 2
    assert stats["active_users"] == 2
    assert stats["new_users_today"] == 2
    assert response.json()["activity_stats"]["daily_logins"][-1]["count"] == 2


def test_growth_rate():
    assert growth_rate(0, 5) == 0
    assert growth_rate(4, 5) == 25
    assert growth_rate(10, 5) == -50


def test_admin_user_search(client, make_user, headers_for):
    admin = make_user(role="admin")
    make_user(first_name="Carla", email="carla@example.com")
    make_user(first_name="Diego", email="diego@example.com")

    response = client.get(
        "/api/admin/users", params={"search": "carl", "limit": 10}, headers=headers_for(admin)
    )
    everyone = client.get("/api/admin/users", params={"limit": 2}, headers=headers_for(admin))

    assert response.status_code == 200
    assert response.json()["total"] == 1
    assert response.json()["items"][0]["first_name"] == "Carla"
    assert everyone.json()["total"] == 3
    assert len(everyone.json()["items"]) == 2
