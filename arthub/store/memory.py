"""In-memory realtime store for development and tests.

Mirrors the Realtime Database semantics the services rely on: ``None``
deletes, server-timestamp placeholders resolve on write, push keys sort
chronologically, and transactions are optimistic compare-and-set with a
bounded number of retries.
"""

import asyncio
import threading
from collections.abc import Mapping
from typing import Any
from uuid import uuid4

import structlog

from .errors import ConflictOnIncrementError
from .interfaces import RealtimeStore, SnapshotCallback, Subscription, TransactionFn
from .paths import (
    get_at,
    is_related,
    now_millis,
    resolve_server_values,
    set_at,
    split_path,
)


logger = structlog.get_logger(__name__)

DEFAULT_MAX_RETRIES = 25


class _MemorySubscription(Subscription):
    def __init__(self, store: "InMemoryRealtimeStore", parts: list[str], callback: SnapshotCallback):
        self._store = store
        self.parts = parts
        self.callback = callback
        self.closed = False

    def close(self) -> None:
        self.closed = True
        self._store._subscriptions.discard(self)


class InMemoryRealtimeStore(RealtimeStore):
    """Thread-safe in-process tree store."""

    def __init__(
        self,
        initial: Mapping[str, Any] | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> None:
        self._lock = threading.Lock()
        self._root: Any = set_at(None, [], dict(initial or {}))
        self._max_retries = max_retries
        self._subscriptions: set[_MemorySubscription] = set()
        self._pending: set[asyncio.Task[None]] = set()
        self._last_push: tuple[int, int] = (0, 0)

    # ------------------------------------------------------------------
    # Reads and writes
    # ------------------------------------------------------------------

    async def get(self, path: str) -> Any:
        with self._lock:
            return get_at(self._root, split_path(path))

    async def set(self, path: str, value: Any) -> None:
        parts = split_path(path)
        with self._lock:
            self._write(parts, resolve_server_values(value))
        self._notify([parts])

    async def update(self, path: str, values: Mapping[str, Any]) -> None:
        base = split_path(path)
        stamp = now_millis()
        written = []
        with self._lock:
            for key, value in values.items():
                parts = base + split_path(key)
                self._write(parts, resolve_server_values(value, stamp))
                written.append(parts)
        self._notify(written)

    async def push(self, path: str, value: Any) -> str:
        key = self._next_push_key()
        await self.set(f"{path}/{key}", value)
        return key

    def _next_push_key(self) -> str:
        """Auto-id that sorts in creation order, like Firebase push ids."""
        with self._lock:
            millis, seq = self._last_push
            now = max(now_millis(), millis)
            seq = seq + 1 if now == millis else 0
            self._last_push = (now, seq)
        return f"{now:013d}{seq:04d}-{uuid4().hex[:6]}"

    async def transaction(self, path: str, update_fn: TransactionFn) -> Any:
        parts = split_path(path)
        for attempt in range(1, self._max_retries + 1):
            with self._lock:
                current = get_at(self._root, parts)

            # Yield so concurrent transactions interleave like remote clients
            await asyncio.sleep(0)
            new_value = resolve_server_values(update_fn(get_at(current, [])))

            with self._lock:
                if get_at(self._root, parts) == current:
                    self._write(parts, new_value)
                    committed = get_at(self._root, parts)
                    break
            logger.debug("transaction_retry", path=path, attempt=attempt)
        else:
            raise ConflictOnIncrementError(path, self._max_retries)

        self._notify([parts])
        return committed

    def _write(self, parts: list[str], value: Any) -> None:
        self._root = set_at(self._root, parts, value)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, path: str, callback: SnapshotCallback) -> Subscription:
        subscription = _MemorySubscription(self, split_path(path), callback)
        self._subscriptions.add(subscription)
        self._deliver(subscription)
        return subscription

    def _notify(self, written: list[list[str]]) -> None:
        for subscription in list(self._subscriptions):
            if any(is_related(subscription.parts, parts) for parts in written):
                self._deliver(subscription)

    def _deliver(self, subscription: _MemorySubscription) -> None:
        with self._lock:
            snapshot = get_at(self._root, subscription.parts)

        async def run() -> None:
            if not subscription.closed:
                await subscription.callback(snapshot)

        task = asyncio.get_running_loop().create_task(run())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait until every scheduled subscription callback has run."""
        while self._pending:
            await asyncio.gather(*list(self._pending))
