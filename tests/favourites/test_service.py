"""Tests for favourite artists."""

import asyncio

import pytest

from arthub.favourites import FavouriteService
from arthub.favourites.models import favourite_artist_ids
from arthub.store import InMemoryRealtimeStore, InvalidKeyError


@pytest.fixture
def store() -> InMemoryRealtimeStore:
    return InMemoryRealtimeStore(
        {"favourites": {"v1": {"artist2": True, "artist1": True, "artist3": "yes"}}}
    )


@pytest.fixture
def favourite_service(store: InMemoryRealtimeStore) -> FavouriteService:
    return FavouriteService(store)


def test_only_true_flags_are_favourites():
    assert favourite_artist_ids({"a": True, "b": 1, "c": "true", "d": True}) == ["a", "d"]
    assert favourite_artist_ids(None) == []


@pytest.mark.asyncio
async def test_list_is_sorted(favourite_service: FavouriteService):
    assert await favourite_service.list_favourites("v1") == ["artist1", "artist2"]
    assert await favourite_service.list_favourites("nobody") == []


@pytest.mark.asyncio
async def test_toggle_adds_then_removes(
    favourite_service: FavouriteService, store: InMemoryRealtimeStore
):
    assert await favourite_service.toggle_favourite("v2", "artist1") is True
    assert await store.get("favourites/v2/artist1") is True

    assert await favourite_service.toggle_favourite("v2", "artist1") is False
    assert await store.get("favourites/v2") is None


@pytest.mark.asyncio
async def test_set_is_idempotent(favourite_service: FavouriteService):
    await favourite_service.set_favourite("v2", "artist1", True)
    await favourite_service.set_favourite("v2", "artist1", True)
    assert await favourite_service.list_favourites("v2") == ["artist1"]

    await favourite_service.set_favourite("v2", "artist1", False)
    await favourite_service.set_favourite("v2", "artist1", False)
    assert await favourite_service.is_favourite("v2", "artist1") is False


@pytest.mark.asyncio
async def test_non_true_value_is_not_favourite(favourite_service: FavouriteService):
    assert await favourite_service.is_favourite("v1", "artist3") is False
    # Toggling a stray value replaces it with a real flag
    assert await favourite_service.toggle_favourite("v1", "artist3") is True


@pytest.mark.asyncio
async def test_concurrent_toggles_are_serialized(favourite_service: FavouriteService):
    results = await asyncio.gather(
        *(favourite_service.toggle_favourite("v3", "artist1") for _ in range(4))
    )

    assert sorted(results) == [False, False, True, True]
    assert await favourite_service.is_favourite("v3", "artist1") is False


@pytest.mark.asyncio
async def test_invalid_artist_id(favourite_service: FavouriteService):
    with pytest.raises(InvalidKeyError):
        await favourite_service.toggle_favourite("v1", "a.b")
