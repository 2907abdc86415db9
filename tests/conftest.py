"""Shared test fixtures."""

import os


# Keep test runs from writing log files or picking up a local Firebase setup
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("FIREBASE_ENABLED", "false")
os.environ.setdefault("REDIS_ENABLED", "false")

from collections.abc import Callable, Iterator  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from arthub.auth.dependencies import get_current_user  # noqa: E402
from arthub.auth.models import AuthenticatedUser  # noqa: E402
from arthub.config import get_settings  # noqa: E402
from arthub.main import create_app, init_services  # noqa: E402
from arthub.store import InMemoryRealtimeStore  # noqa: E402


ARTIST = AuthenticatedUser(uid="artist1", email="painter@example.com")
ADMIN = AuthenticatedUser(uid="admin1", email="admin@example.com")
VISITOR = AuthenticatedUser(uid="visitor1", email="guest@example.com")


def seed_accounts() -> dict:
    return {
        "accounts": {
            ARTIST.uid: {"email": ARTIST.email, "role": "artist"},
            ADMIN.uid: {"email": ADMIN.email, "role": "admin"},
            VISITOR.uid: {"email": VISITOR.email, "role": "visitor"},
        }
    }


@pytest.fixture
def store() -> InMemoryRealtimeStore:
    """In-memory store seeded with one account per role."""
    return InMemoryRealtimeStore(seed_accounts())


@pytest.fixture
def app(store: InMemoryRealtimeStore) -> FastAPI:
    """Application wired to the in-memory store, without the lifespan."""
    application = create_app()
    init_services(application, store, get_settings())
    return application


@pytest.fixture
def login(app: FastAPI) -> Callable[[AuthenticatedUser], None]:
    """Authenticate every following request as the given user."""

    def _login(user: AuthenticatedUser) -> None:
        app.dependency_overrides[get_current_user] = lambda: user

    return _login


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Test client without an authenticated user."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def artist_user() -> AuthenticatedUser:
    return ARTIST


@pytest.fixture
def admin_user() -> AuthenticatedUser:
    return ADMIN


@pytest.fixture
def visitor_user() -> AuthenticatedUser:
    return VISITOR
