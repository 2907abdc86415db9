"""Tests for the comment thread endpoints."""

from collections.abc import Callable

from fastapi.testclient import TestClient

from arthub.auth.models import AuthenticatedUser


def test_post_and_read_thread(
    client: TestClient,
    login: Callable[[AuthenticatedUser], None],
    visitor_user: AuthenticatedUser,
):
    login(visitor_user)

    created = client.post("/v1/comments/comments/a1", json={"text": "Great piece"})
    assert created.status_code == 201
    root_id = created.json()["id"]

    reply = client.post(
        "/v1/comments/comments/a1/replies",
        json={"text": "Agreed", "parent_path": [root_id]},
    )
    assert reply.status_code == 201

    response = client.get("/v1/comments/comments/a1")
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert data["collection"] == "comments"
    assert data["comments"][0]["text"] == "Great piece"
    assert data["comments"][0]["author_id"] == visitor_user.uid
    assert data["comments"][0]["replies"][0]["text"] == "Agreed"


def test_reply_to_missing_parent_is_404(
    client: TestClient,
    login: Callable[[AuthenticatedUser], None],
    visitor_user: AuthenticatedUser,
):
    login(visitor_user)
    response = client.post(
        "/v1/comments/eventComments/e1/replies",
        json={"text": "Hello", "parent_path": ["ghost"]},
    )
    assert response.status_code == 404


def test_blank_comment_is_rejected(
    client: TestClient,
    login: Callable[[AuthenticatedUser], None],
    visitor_user: AuthenticatedUser,
):
    login(visitor_user)
    response = client.post("/v1/comments/comments/a1", json={"text": "   "})
    assert response.status_code == 422


def test_unknown_collection_is_rejected(
    client: TestClient,
    login: Callable[[AuthenticatedUser], None],
    visitor_user: AuthenticatedUser,
):
    login(visitor_user)
    response = client.get("/v1/comments/users/a1")
    assert response.status_code == 422


def test_invalid_subject_key_is_400(
    client: TestClient,
    login: Callable[[AuthenticatedUser], None],
    visitor_user: AuthenticatedUser,
):
    login(visitor_user)
    response = client.get("/v1/comments/comments/a.1")
    assert response.status_code == 400
