"""Tests for the favourites endpoints."""

from collections.abc import Callable

from fastapi.testclient import TestClient

from arthub.auth.models import AuthenticatedUser


def test_favourite_lifecycle(
    client: TestClient,
    login: Callable[[AuthenticatedUser], None],
    visitor_user: AuthenticatedUser,
):
    login(visitor_user)

    assert client.get("/v1/favourites/artist1").json() == {
        "artist_id": "artist1",
        "favourite": False,
    }

    toggled = client.post("/v1/favourites/artist1/toggle")
    assert toggled.status_code == 200
    assert toggled.json()["favourite"] is True

    assert client.put("/v1/favourites/artist2").json()["favourite"] is True
    assert client.get("/v1/favourites").json() == {
        "artist_ids": ["artist1", "artist2"],
        "total": 2,
    }

    assert client.delete("/v1/favourites/artist1").json()["favourite"] is False
    assert client.get("/v1/favourites").json()["artist_ids"] == ["artist2"]


def test_favourites_are_per_user(
    client: TestClient,
    login: Callable[[AuthenticatedUser], None],
    visitor_user: AuthenticatedUser,
    admin_user: AuthenticatedUser,
):
    login(visitor_user)
    client.put("/v1/favourites/artist1")

    login(admin_user)
    assert client.get("/v1/favourites").json()["total"] == 0


def test_invalid_artist_id_is_400(
    client: TestClient,
    login: Callable[[AuthenticatedUser], None],
    visitor_user: AuthenticatedUser,
):
    login(visitor_user)
    assert client.put("/v1/favourites/bad$id").status_code == 400
