"""Tests for interaction counters."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from arthub.counters import CounterService, CounterStrategy, CounterStrategyError, strategy_for
from arthub.store import (
    ConflictOnIncrementError,
    InMemoryRealtimeStore,
    InvalidKeyError,
    RealtimeStore,
    TransientStoreError,
)


@pytest.fixture
def store() -> InMemoryRealtimeStore:
    return InMemoryRealtimeStore()


@pytest.fixture
def counter_service(store: InMemoryRealtimeStore) -> CounterService:
    return CounterService(store)


class TestRegistry:
    @pytest.mark.parametrize("name", ["likes", "interested", "rsvp.attending"])
    def test_membership_counters(self, name: str):
        assert strategy_for(name) == CounterStrategy.MEMBERSHIP

    @pytest.mark.parametrize("name", ["views", "shares", "anything_else"])
    def test_transactional_counters(self, name: str):
        assert strategy_for(name) == CounterStrategy.TRANSACTIONAL


class TestIncrementCounter:
    @pytest.mark.asyncio
    async def test_returns_committed_value(
        self, counter_service: CounterService, store: InMemoryRealtimeStore
    ):
        assert await counter_service.increment_counter("a1", "views", 1) == 1
        assert await counter_service.increment_counter("a1", "views", 4) == 5
        assert await store.get("counters/a1/views") == 5

    @pytest.mark.asyncio
    async def test_two_concurrent_increments_converge(self, counter_service: CounterService):
        await asyncio.gather(
            counter_service.increment_counter("a1", "views", 1),
            counter_service.increment_counter("a1", "views", 1),
        )
        assert await counter_service.counter_value("a1", "views") == 2

    @pytest.mark.asyncio
    async def test_concurrent_increment_decrement_pairs_end_at_zero(
        self, counter_service: CounterService
    ):
        observed: list[int] = []

        async def pair() -> None:
            observed.append(await counter_service.increment_counter("e1", "shares", 1))
            observed.append(await counter_service.increment_counter("e1", "shares", -1))

        await asyncio.gather(*(pair() for _ in range(8)))

        assert await counter_service.counter_value("e1", "shares") == 0
        assert all(value >= 0 for value in observed)

    @pytest.mark.asyncio
    async def test_decrement_clamps_at_zero(self, counter_service: CounterService):
        assert await counter_service.increment_counter("a1", "views", -3) == 0
        assert await counter_service.counter_value("a1", "views") == 0

    @pytest.mark.asyncio
    async def test_corrupt_stored_value_counts_as_zero(self):
        store = InMemoryRealtimeStore({"counters": {"a1": {"views": "lots"}}})
        service = CounterService(store)
        assert await service.increment_counter("a1", "views", 1) == 1

    @pytest.mark.asyncio
    async def test_membership_counter_cannot_be_incremented(
        self, counter_service: CounterService
    ):
        with pytest.raises(CounterStrategyError) as exc_info:
            await counter_service.increment_counter("a1", "likes", 1)
        assert exc_info.value.code == "counter_strategy_mismatch"

    @pytest.mark.asyncio
    async def test_exhausted_retries_surface_as_transient_error(self):
        store = AsyncMock(spec=RealtimeStore)
        store.transaction.side_effect = ConflictOnIncrementError("counters/a1/views", 25)
        service = CounterService(store)

        with pytest.raises(TransientStoreError):
            await service.increment_counter("a1", "views", 1)

    @pytest.mark.asyncio
    async def test_invalid_subject_key(self, counter_service: CounterService):
        with pytest.raises(InvalidKeyError):
            await counter_service.increment_counter("a/1", "views", 1)


class TestMembership:
    @pytest.mark.asyncio
    async def test_join_is_idempotent(
        self, counter_service: CounterService, store: InMemoryRealtimeStore
    ):
        first = await counter_service.set_membership("a1", "likes", "u1", True)
        second = await counter_service.set_membership("a1", "likes", "u1", True)

        assert first.count == 1
        assert second.count == 1
        assert second.active is True
        assert await store.get("engagement/a1/likes") == {
            "members": {"u1": True},
            "count": 1,
        }

    @pytest.mark.asyncio
    async def test_count_matches_members_after_joins_and_leaves(
        self, counter_service: CounterService, store: InMemoryRealtimeStore
    ):
        for uid in ("u1", "u2", "u3"):
            await counter_service.set_membership("e1", "interested", uid, True)
        await counter_service.set_membership("e1", "interested", "u2", False)
        await counter_service.set_membership("e1", "interested", "u9", False)

        node = await store.get("engagement/e1/interested")
        assert node["count"] == len(node["members"]) == 2
        assert await counter_service.counter_value("e1", "interested") == 2

    @pytest.mark.asyncio
    async def test_concurrent_joins_are_all_counted(self, counter_service: CounterService):
        results = await asyncio.gather(
            *(
                counter_service.set_membership("a1", "likes", f"u{i}", True)
                for i in range(6)
            )
        )

        assert all(r.active for r in results)
        assert await counter_service.counter_value("a1", "likes") == 6

    @pytest.mark.asyncio
    async def test_last_leave_removes_node(
        self, counter_service: CounterService, store: InMemoryRealtimeStore
    ):
        await counter_service.set_membership("a1", "likes", "u1", True)
        result = await counter_service.set_membership("a1", "likes", "u1", False)

        assert result.active is False
        assert result.count == 0
        assert await store.get("engagement") is None

    @pytest.mark.asyncio
    async def test_toggle_flips_membership(self, counter_service: CounterService):
        on = await counter_service.toggle_membership("e1", "rsvp.attending", "u1")
        off = await counter_service.toggle_membership("e1", "rsvp.attending", "u1")

        assert (on.active, on.count) == (True, 1)
        assert (off.active, off.count) == (False, 0)

    @pytest.mark.asyncio
    async def test_dotted_names_nest(
        self, counter_service: CounterService, store: InMemoryRealtimeStore
    ):
        await counter_service.set_membership("e1", "rsvp.attending", "u1", True)
        assert await store.get("engagement/e1/rsvp/attending/count") == 1

    @pytest.mark.asyncio
    async def test_is_member(self, counter_service: CounterService):
        await counter_service.set_membership("a1", "likes", "u1", True)
        assert await counter_service.is_member("a1", "likes", "u1") is True
        assert await counter_service.is_member("a1", "likes", "u2") is False

    @pytest.mark.asyncio
    async def test_stale_false_flags_are_not_members(self):
        store = InMemoryRealtimeStore(
            {"engagement": {"a1": {"likes": {"members": {"u1": True, "u2": False}, "count": 7}}}}
        )
        service = CounterService(store)

        assert await service.counter_value("a1", "likes") == 1
        result = await service.set_membership("a1", "likes", "u3", True)
        assert result.count == 2

    @pytest.mark.asyncio
    async def test_transactional_counter_has_no_members(self, counter_service: CounterService):
        with pytest.raises(CounterStrategyError):
            await counter_service.set_membership("a1", "views", "u1", True)
