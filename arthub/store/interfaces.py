"""Remote data store interface.

Services depend only on this contract: read a subtree once, subscribe to a
subtree, write at a path, and run an atomic read-modify-write with retry.
Implementations must be swappable (Firebase in production, memory in tests).
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Mapping
from typing import Any


SnapshotCallback = Callable[[Any], Awaitable[None]]
TransactionFn = Callable[[Any], Any]


class Subscription(ABC):
    """Handle for an active subtree subscription."""

    @abstractmethod
    def close(self) -> None:
        """Stop delivering change notifications."""
        ...


class RealtimeStore(ABC):
    """Interface for the tree-shaped realtime key-value store."""

    @abstractmethod
    async def get(self, path: str) -> Any:
        """Return the subtree at ``path`` (``None`` when absent)."""
        ...

    @abstractmethod
    async def set(self, path: str, value: Any) -> None:
        """Replace the value at ``path``. ``None`` deletes it."""
        ...

    @abstractmethod
    async def update(self, path: str, values: Mapping[str, Any]) -> None:
        """Write several children of ``path`` at once.

        Keys may be relative multi-segment paths (``"m1/isRead"``).
        """
        ...

    @abstractmethod
    async def push(self, path: str, value: Any) -> str:
        """Append ``value`` under a new auto-generated key and return the key."""
        ...

    @abstractmethod
    async def transaction(self, path: str, update_fn: TransactionFn) -> Any:
        """Atomically apply ``update_fn`` to the value at ``path``.

        ``update_fn`` receives the current value and returns the new one; it may
        run several times under contention and must be free of side effects.
        Returns the committed value.

        Raises:
            ConflictOnIncrementError: When retries are exhausted.
            TransientStoreError: On network or availability failures.
        """
        ...

    @abstractmethod
    def subscribe(self, path: str, callback: SnapshotCallback) -> Subscription:
        """Deliver the full value at ``path`` now and after every change.

        Callbacks run on the event loop that created the subscription.
        """
        ...

    async def delete(self, path: str) -> None:
        await self.set(path, None)
