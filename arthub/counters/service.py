"""Interaction counter service.

All mutations go through ``RealtimeStore.transaction`` and return the
committed value; nothing is updated locally before the commit.
"""

from typing import Any

import structlog

from arthub.store import RealtimeStore, validate_key
from arthub.store.interfaces import TransactionFn

from .models import (
    CounterStrategy,
    MembershipResult,
    apply_delta,
    as_count,
    counter_path,
    members_of,
    membership_node,
    strategy_for,
)


logger = structlog.get_logger(__name__)


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class CounterError(Exception):
    """Base counter error."""

    def __init__(self, message: str, code: str = "counter_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class CounterStrategyError(CounterError):
    """Operation does not match the counter's registered strategy."""

    def __init__(self, name: str, strategy: CounterStrategy):
        super().__init__(
            f"Counter '{name}' is maintained by {strategy.value}",
            "counter_strategy_mismatch",
        )
        self.name = name
        self.strategy = strategy


# ==============================================================================
# Counter Service
# ==============================================================================


class CounterService:
    """Service for likes, interest, RSVP and plain counters."""

    def __init__(self, store: RealtimeStore):
        self.store = store

    def _require(self, name: str, strategy: CounterStrategy) -> None:
        actual = strategy_for(name)
        if actual != strategy:
            raise CounterStrategyError(name, actual)

    async def increment_counter(self, subject_id: str, name: str, delta: int) -> int:
        """Atomically add ``delta`` (may be negative) and return the new value.

        The value never drops below zero.

        Raises:
            CounterStrategyError: If the counter is membership-derived.
            TransientStoreError: If the transaction cannot commit.
        """
        self._require(name, CounterStrategy.TRANSACTIONAL)
        path = counter_path(subject_id, name)

        committed = await self.store.transaction(
            path, lambda current: apply_delta(current, delta)
        )
        value = as_count(committed)

        logger.info(
            "counter_incremented",
            subject_id=subject_id,
            counter=name,
            delta=delta,
            value=value,
        )
        return value

    async def counter_value(self, subject_id: str, name: str) -> int:
        """Point-in-time value of any counter."""
        node = await self.store.get(counter_path(subject_id, name))
        if strategy_for(name) == CounterStrategy.MEMBERSHIP:
            return len(members_of(node))
        return as_count(node)

    async def set_membership(
        self, subject_id: str, name: str, user_id: str, active: bool
    ) -> MembershipResult:
        """Add or remove ``user_id`` and recount in one transaction.

        Idempotent: joining twice leaves the count unchanged.
        """
        self._require(name, CounterStrategy.MEMBERSHIP)
        validate_key(user_id)

        def update(node: Any) -> dict[str, Any] | None:
            members = members_of(node)
            if active:
                members[user_id] = True
            else:
                members.pop(user_id, None)
            return membership_node(members)

        return await self._commit_membership(subject_id, name, user_id, update)

    async def toggle_membership(
        self, subject_id: str, name: str, user_id: str
    ) -> MembershipResult:
        """Flip the caller's membership inside one transaction."""
        self._require(name, CounterStrategy.MEMBERSHIP)
        validate_key(user_id)

        def update(node: Any) -> dict[str, Any] | None:
            members = members_of(node)
            if members.pop(user_id, None) is None:
                members[user_id] = True
            return membership_node(members)

        return await self._commit_membership(subject_id, name, user_id, update)

    async def _commit_membership(
        self, subject_id: str, name: str, user_id: str, update: TransactionFn
    ) -> MembershipResult:
        committed = await self.store.transaction(counter_path(subject_id, name), update)
        members = members_of(committed)
        result = MembershipResult(active=user_id in members, count=len(members))

        logger.info(
            "membership_changed",
            subject_id=subject_id,
            counter=name,
            user_id=user_id,
            active=result.active,
            count=result.count,
        )
        return result

    async def is_member(self, subject_id: str, name: str, user_id: str) -> bool:
        self._require(name, CounterStrategy.MEMBERSHIP)
        node = await self.store.get(counter_path(subject_id, name))
        return validate_key(user_id) in members_of(node)
