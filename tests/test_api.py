"""HTTP tests through the FastAPI application."""

import pytest
import structlog
from httpx import ASGITransport, AsyncClient

from agora.shared.core import responses


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_ready_and_live(client):
    assert (await client.get("/ready")).json() == {"status": "ready"}
    assert (await client.get("/live")).json() == {"status": "alive"}


# ═══════════════════════════════════════════════════════════════════════════════
# AUTH
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_sign_up_sign_in_and_me(client, sign_up):
    user, headers = await sign_up("Jane.Doe@Example.com", name="Jane")

    assert user["email"] == "jane.doe@example.com"
    assert user["username"] == "janedoe"

    signed_in = await client.post(
        "/auth/sign-in",
        json={"email": "jane.doe@example.com", "password": "Passw0rd!"},
    )
    assert signed_in.status_code == 200
    assert signed_in.json()["data"]["user"]["id"] == user["id"]

    me = await client.get("/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json() == {
        "success": True,
        "data": {
            "id": user["id"],
            "email": "jane.doe@example.com",
            "name": "Jane",
            "image": None,
            "username": "janedoe",
        },
    }


@pytest.mark.asyncio
async def test_second_account_gets_suffixed_username(sign_up):
    await sign_up("jane@example.com")
    second, _ = await sign_up("jane@example.org")

    assert second["username"] == "jane1"


@pytest.mark.asyncio
async def test_duplicate_email_conflicts(client, sign_up):
    await sign_up("jane@example.com")

    response = await client.post(
        "/auth/sign-up",
        json={"email": "jane@example.com", "password": "Passw0rd!", "name": "Jane"},
        headers={"X-Forwarded-For": "192.0.2.50"},
    )

    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"
    assert response.json()["error"] == "Email already in use"


@pytest.mark.asyncio
async def test_wrong_password_is_unauthorized(client, sign_up):
    await sign_up("jane@example.com")

    response = await client.post(
        "/auth/sign-in",
        json={"email": "jane@example.com", "password": "Wrong1234"},
    )

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_me_without_token(client):
    response = await client.get("/auth/me")

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_invalid_token_is_rejected(client):
    response = await client.get("/posts", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "error": "Invalid token",
        "code": "UNAUTHORIZED",
        "statusCode": 401,
    }


@pytest.mark.asyncio
async def test_sign_up_limited_per_ip(client):
    statuses = []
    for i in range(4):
        response = await client.post(
            "/auth/sign-up",
            json={"email": f"user{i}@example.com", "password": "Passw0rd!", "name": "User"},
            headers={"X-Forwarded-For": "198.51.100.1"},
        )
        statuses.append(response.status_code)

    assert statuses == [201, 201, 201, 429]


# ═══════════════════════════════════════════════════════════════════════════════
# POSTS
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_post_lifecycle(client, sign_up):
    author, author_headers = await sign_up("author@example.com")
    _, fan_headers = await sign_up("fan@example.com")

    created = await client.post("/posts", json={"content": "hello world"}, headers=author_headers)
    assert created.status_code == 201
    post = created.json()["data"]
    assert post["author"]["id"] == author["id"]

    liked = await client.post(f"/posts/{post['id']}/like", headers=fan_headers)
    assert liked.json()["data"] == {"liked": True, "likeCount": 1}

    commented = await client.post(
        f"/posts/{post['id']}/comments",
        json={"content": "nice"},
        headers=fan_headers,
    )
    assert commented.status_code == 201

    feed = (await client.get("/posts", headers=fan_headers)).json()["data"]
    assert feed["items"][0]["id"] == post["id"]
    assert feed["items"][0]["likeCount"] == 1
    assert feed["items"][0]["commentCount"] == 1
    assert feed["items"][0]["hasLiked"] is True

    comments = (await client.get(f"/posts/{post['id']}/comments")).json()["data"]
    assert [c["content"] for c in comments["items"]] == ["nice"]

    forbidden = await client.delete(f"/posts/{post['id']}", headers=fan_headers)
    assert forbidden.status_code == 403

    deleted = await client.delete(f"/posts/{post['id']}", headers=author_headers)
    assert deleted.json()["data"] == {"id": post["id"], "deleted": True}

    missing = await client.get(f"/posts/{post['id']}")
    assert missing.status_code == 404
    assert missing.json()["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_anonymous_post_is_unauthorized(client):
    response = await client.post("/posts", json={"content": "hello"})

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_missing_body_field_is_validation_error(client, sign_up):
    _, headers = await sign_up("jane@example.com")

    response = await client.post("/posts", json={}, headers=headers)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "VALIDATION_ERROR"
    assert "content" in body["details"]["errors"]


@pytest.mark.asyncio
async def test_feed_limit_out_of_range(client):
    response = await client.get("/posts", params={"limit": 51})

    assert response.status_code == 400
    assert response.json()["error"] == "Limit cannot exceed 50"


# ═══════════════════════════════════════════════════════════════════════════════
# USERS
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_follow_self_is_rejected(client, sign_up):
    me, headers = await sign_up("jane@example.com")

    response = await client.post(f"/users/{me['id']}/follow", headers=headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Cannot follow yourself"


@pytest.mark.asyncio
async def test_follow_and_profile(client, sign_up):
    jane, _ = await sign_up("jane@example.com")
    _, bob_headers = await sign_up("bob@example.com")

    followed = await client.post(f"/users/{jane['id']}/follow", headers=bob_headers)
    assert followed.json()["data"] == {"following": True, "followerCount": 1}

    profile = (await client.get("/users/jane", headers=bob_headers)).json()["data"]
    assert profile["followerCount"] == 1
    assert profile["isFollowing"] is True

    anonymous = (await client.get("/users/jane")).json()["data"]
    assert anonymous["isFollowing"] is None


@pytest.mark.asyncio
async def test_update_profile(client, sign_up):
    _, headers = await sign_up("jane@example.com")

    response = await client.patch(
        "/users/me",
        json={"bio": "Hello", "website": "https://jane.dev"},
        headers=headers,
    )

    data = response.json()["data"]
    assert data["bio"] == "Hello"
    assert data["website"] == "https://jane.dev"


@pytest.mark.asyncio
async def test_suggestions_exclude_followed(client, sign_up):
    jane, _ = await sign_up("jane@example.com")
    bob, _ = await sign_up("bob@example.com")
    _, me_headers = await sign_up("me@example.com")
    await client.post(f"/users/{jane['id']}/follow", headers=me_headers)

    suggestions = (await client.get("/users/suggestions", headers=me_headers)).json()["data"]

    assert [s["id"] for s in suggestions] == [bob["id"]]


@pytest.mark.asyncio
async def test_ensure_username_keeps_existing_handle(client, sign_up):
    user, headers = await sign_up("jane@example.com")

    response = await client.post("/users/me/username", headers=headers)

    assert response.json()["data"]["username"] == user["username"]


@pytest.mark.asyncio
async def test_user_timelines(client, sign_up):
    jane, jane_headers = await sign_up("jane@example.com")
    bob, bob_headers = await sign_up("bob@example.com")
    created = await client.post("/posts", json={"content": "mine"}, headers=jane_headers)
    post_id = created.json()["data"]["id"]
    await client.post(f"/posts/{post_id}/like", headers=bob_headers)

    posts = (await client.get(f"/users/{jane['id']}/posts")).json()["data"]
    likes = (await client.get(f"/users/{bob['id']}/likes")).json()["data"]

    assert [p["id"] for p in posts["items"]] == [post_id]
    assert [p["id"] for p in likes["items"]] == [post_id]


# ═══════════════════════════════════════════════════════════════════════════════
# NOTIFICATIONS
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_notification_flow(client, sign_up):
    jane, jane_headers = await sign_up("jane@example.com")
    bob, bob_headers = await sign_up("bob@example.com")
    await client.post(f"/users/{jane['id']}/follow", headers=bob_headers)

    count = (await client.get("/notifications/unread-count", headers=jane_headers)).json()
    assert count["data"] == {"count": 1}

    inbox = (await client.get("/notifications", headers=jane_headers)).json()["data"]
    notification = inbox["items"][0]
    assert notification["type"] == "FOLLOW"
    assert notification["creator"]["id"] == bob["id"]
    assert notification["read"] is False

    forbidden = await client.post(f"/notifications/{notification['id']}/read", headers=bob_headers)
    assert forbidden.status_code == 403

    marked = await client.post(f"/notifications/{notification['id']}/read", headers=jane_headers)
    assert marked.json()["data"] == {"updated": 1}

    unread = (
        await client.get("/notifications", params={"unreadOnly": "true"}, headers=jane_headers)
    ).json()["data"]
    assert unread["items"] == []


@pytest.mark.asyncio
async def test_notifications_require_sign_in(client):
    response = await client.get("/notifications")

    assert response.status_code == 401


# ═══════════════════════════════════════════════════════════════════════════════
# ERRORS
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_unknown_route_uses_envelope(client):
    response = await client.get("/does-not-exist")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "NOT_FOUND"


class RecordingLogger:
    """Stands in for the module logger; keeps each call with the bound context."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict]] = []

    def _record(self, level: str, event: str, **kw) -> None:
        context = dict(structlog.contextvars.get_contextvars())
        self.calls.append((level, event, {**context, **kw}))

    def error(self, event: str, **kw) -> None:
        self._record("error", event, **kw)

    def warning(self, event: str, **kw) -> None:
        self._record("warning", event, **kw)

    def info(self, event: str, **kw) -> None:
        self._record("info", event, **kw)


@pytest.mark.asyncio
async def test_unhandled_error_is_generic_500_logged_once(app, monkeypatch):
    recorder = RecordingLogger()
    monkeypatch.setattr(responses, "logger", recorder)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database password is hunter2")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        response = await http_client.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "INTERNAL_SERVER_ERROR"
    assert "hunter2" not in response.text

    errors = [call for call in recorder.calls if call[0] == "error"]
    assert len(errors) == 1
    assert errors[0][2]["path"] == "/boom"
    assert "path" not in structlog.contextvars.get_contextvars()
