"""Tests for health endpoints."""

from fastapi.testclient import TestClient


def test_liveness(client: TestClient) -> None:
    """Test the liveness endpoint."""
    response = client.get("/health/live")
    assert response.status_code == 200
    assert response.json() == {"status": "alive"}


def test_readiness(client: TestClient) -> None:
    """Test the readiness endpoint."""
    response = client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["store"] == "InMemoryRealtimeStore"
    assert "environment" in data
    assert "debug" in data


def test_health(client: TestClient) -> None:
    """Test the general health endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["app_name"] == "arthub"
    assert "version" in data
    assert "environment" in data


def test_root(client: TestClient) -> None:
    """Test the root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "ArtHub" in data["message"]
    assert "version" in data


def test_request_id_is_echoed(client: TestClient) -> None:
    """The request id sent by the client comes back on the response."""
    response = client.get("/health/live", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_protected_route_requires_token(client: TestClient) -> None:
    """Routes behind authentication reject calls without a bearer token."""
    response = client.get("/v1/accounts/me")
    assert response.status_code == 401
    data = response.json()
    assert data["error"] is True
    assert data["message"] == "Access token not provided"
