from __future__ import annotations

from datetime import timedelta

from vidtube.core.security import create_access_token

API = "/api/v1/users"


def test_current_user_profile(client, make_user, auth) -> None:
    user = make_user("alice")

    r = client.get(f"{API}/me", headers=auth(user))
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["id"] == user.id
    assert data["email"] == "alice@example.com"


def test_watch_history_is_deduplicated(client, make_user, make_video, auth) -> None:
    owner = make_user("alice")
    viewer = make_user("bob")
    first = make_video(owner, title="first")
    second = make_video(owner, title="second")

    for video_id in (first.id, second.id, first.id):
        client.get(f"/api/v1/videos/{video_id}", headers=auth(viewer))

    r = client.get(f"{API}/me/history", headers=auth(viewer))
    assert r.status_code == 200
    titles = [v["title"] for v in r.json()["data"]]
    assert sorted(titles) == ["first", "second"]


def test_authentication_errors(client, make_user, settings) -> None:
    assert client.get(f"{API}/me").status_code == 401

    r = client.get(f"{API}/me", headers={"Authorization": "Bearer not-a-token"})
    assert r.status_code == 401
    assert r.json()["success"] is False

    expired = create_access_token(make_user("alice").id, settings, expires_delta=timedelta(minutes=-5))
    assert client.get(f"{API}/me", headers={"Authorization": f"Bearer {expired}"}).status_code == 401

    ghost = create_access_token("0" * 32, settings)
    assert client.get(f"{API}/me", headers={"Authorization": f"Bearer {ghost}"}).status_code == 401
