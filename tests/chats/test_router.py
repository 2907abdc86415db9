"""Tests for the chat endpoints."""

from collections.abc import Callable

from fastapi.testclient import TestClient

from arthub.auth.models import AuthenticatedUser


def test_send_read_and_mark(
    client: TestClient,
    login: Callable[[AuthenticatedUser], None],
    admin_user: AuthenticatedUser,
    artist_user: AuthenticatedUser,
):
    chat_id = "admin1_artist1"

    login(admin_user)
    sent = client.post(f"/v1/chats/{chat_id}/messages", json={"text": "Welcome!"})
    assert sent.status_code == 201

    login(artist_user)
    unread = client.get("/v1/chats/unread").json()
    assert unread["total_unread"] == 1
    assert unread["senders"][0]["email"] == admin_user.email

    messages = client.get(f"/v1/chats/{chat_id}/messages").json()["messages"]
    assert [(m["message"], m["sender"]) for m in messages] == [("Welcome!", "admin")]

    assert client.post(f"/v1/chats/{chat_id}/read").json() == {"marked": 1}
    assert client.get("/v1/chats/unread").json() == {"senders": [], "total_unread": 0}


def test_outsider_cannot_read_chat(
    client: TestClient,
    login: Callable[[AuthenticatedUser], None],
    visitor_user: AuthenticatedUser,
):
    login(visitor_user)
    assert client.get("/v1/chats/admin1_artist1/messages").status_code == 403


def test_user_without_role_cannot_send(
    client: TestClient,
    login: Callable[[AuthenticatedUser], None],
):
    login(AuthenticatedUser(uid="newcomer"))
    response = client.post("/v1/chats/admin1_newcomer/messages", json={"text": "hi"})
    assert response.status_code == 403
