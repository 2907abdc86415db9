"""Tests for the in-memory realtime store."""

import asyncio
import time

import pytest

from arthub.store import SERVER_TIMESTAMP, ConflictOnIncrementError, InMemoryRealtimeStore
from arthub.store.paths import split_path


@pytest.fixture
def store() -> InMemoryRealtimeStore:
    return InMemoryRealtimeStore({"events": {"e1": {"title": "Spring Show"}}})


class TestReadWrite:
    @pytest.mark.asyncio
    async def test_get_subtree(self, store: InMemoryRealtimeStore):
        assert await store.get("events/e1/title") == "Spring Show"
        assert await store.get("events/missing") is None

    @pytest.mark.asyncio
    async def test_set_none_deletes(self, store: InMemoryRealtimeStore):
        await store.set("events/e1", None)
        assert await store.get("events") is None

    @pytest.mark.asyncio
    async def test_update_writes_relative_paths(self, store: InMemoryRealtimeStore):
        await store.update("events", {"e1/title": "Renamed", "e2/title": "New"})
        assert await store.get("events") == {
            "e1": {"title": "Renamed"},
            "e2": {"title": "New"},
        }

    @pytest.mark.asyncio
    async def test_server_timestamp_resolved_on_write(self, store: InMemoryRealtimeStore):
        before = int(time.time() * 1000)
        await store.set("stamp", {"at": SERVER_TIMESTAMP})
        stamped = await store.get("stamp/at")
        assert isinstance(stamped, int)
        assert stamped >= before

    @pytest.mark.asyncio
    async def test_push_keys_sort_in_creation_order(self, store: InMemoryRealtimeStore):
        keys = [await store.push("log", {"n": n}) for n in range(5)]
        assert keys == sorted(keys)
        assert len(set(keys)) == 5


class TestTransactions:
    @pytest.mark.asyncio
    async def test_returns_committed_value(self, store: InMemoryRealtimeStore):
        result = await store.transaction("n", lambda v: (v or 0) + 5)
        assert result == 5
        assert await store.get("n") == 5

    @pytest.mark.asyncio
    async def test_concurrent_transactions_do_not_lose_updates(
        self, store: InMemoryRealtimeStore
    ):
        await asyncio.gather(
            *(store.transaction("n", lambda v: (v or 0) + 1) for _ in range(10))
        )
        assert await store.get("n") == 10

    @pytest.mark.asyncio
    async def test_raises_conflict_when_retries_exhausted(self):
        store = InMemoryRealtimeStore(max_retries=3)
        calls = 0

        def always_outraced(value):
            nonlocal calls
            calls += 1
            # Another writer commits between our read and our write
            store._write(split_path("n"), calls * 100)
            return (value or 0) + 1

        with pytest.raises(ConflictOnIncrementError) as exc_info:
            await store.transaction("n", always_outraced)

        assert calls == 3
        assert exc_info.value.code == "conflict_on_increment"
        assert exc_info.value.attempts == 3


class TestSubscriptions:
    @pytest.mark.asyncio
    async def test_delivers_initial_value_and_changes(self, store: InMemoryRealtimeStore):
        seen = []

        async def on_change(snapshot):
            seen.append(snapshot)

        store.subscribe("events", on_change)
        await store.drain()
        await store.set("events/e1/title", "Changed")
        await store.drain()

        assert seen == [
            {"e1": {"title": "Spring Show"}},
            {"e1": {"title": "Changed"}},
        ]

    @pytest.mark.asyncio
    async def test_unrelated_writes_are_not_delivered(self, store: InMemoryRealtimeStore):
        seen = []

        async def on_change(snapshot):
            seen.append(snapshot)

        store.subscribe("events", on_change)
        await store.drain()
        await store.set("chats/c1", {"x": 1})
        await store.drain()

        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_closed_subscription_stops_delivery(self, store: InMemoryRealtimeStore):
        seen = []

        async def on_change(snapshot):
            seen.append(snapshot)

        subscription = store.subscribe("events", on_change)
        await store.drain()
        subscription.close()
        await store.set("events/e1/title", "Changed")
        await store.drain()

        assert len(seen) == 1
