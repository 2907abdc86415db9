"""Last-observed status cache.

Keyed by ``(owner_id, subject_id)``. Only the status-change coordinator
writes to it.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .models import InvitationStatus


if TYPE_CHECKING:
    from redis.asyncio import Redis


class StatusCache(ABC):
    """Storage for the most recently observed status per subject."""

    @abstractmethod
    async def get(self, owner_id: str, subject_id: str) -> InvitationStatus:
        """Return the cached status, ``UNKNOWN`` when never observed."""
        ...

    @abstractmethod
    async def set(
        self, owner_id: str, subject_id: str, status: InvitationStatus
    ) -> None: ...

    @abstractmethod
    async def clear(self, owner_id: str) -> None:
        """Forget every subject observed for ``owner_id``."""
        ...


class MemoryStatusCache(StatusCache):
    """Process-local cache."""

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], InvitationStatus] = {}

    async def get(self, owner_id: str, subject_id: str) -> InvitationStatus:
        return self._entries.get((owner_id, subject_id), InvitationStatus.UNKNOWN)

    async def set(
        self, owner_id: str, subject_id: str, status: InvitationStatus
    ) -> None:
        self._entries[(owner_id, subject_id)] = status

    async def clear(self, owner_id: str) -> None:
        for key in [key for key in self._entries if key[0] == owner_id]:
            del self._entries[key]


class RedisStatusCache(StatusCache):
    """Cache shared across processes: one Redis hash per owner.

    Uses the ``{prefix}:{owner_id}`` hash with a field per subject.
    """

    def __init__(self, redis: "Redis", key_prefix: str = "status:last_observed"):
        self.redis = redis
        self.key_prefix = key_prefix

    def _key(self, owner_id: str) -> str:
        return f"{self.key_prefix}:{owner_id}"

    async def get(self, owner_id: str, subject_id: str) -> InvitationStatus:
        value = await self.redis.hget(self._key(owner_id), subject_id)
        if isinstance(value, bytes):
            value = value.decode()
        try:
            return InvitationStatus(value) if value else InvitationStatus.UNKNOWN
        except ValueError:
            return InvitationStatus.UNKNOWN

    async def set(
        self, owner_id: str, subject_id: str, status: InvitationStatus
    ) -> None:
        await self.redis.hset(self._key(owner_id), subject_id, status.value)

    async def clear(self, owner_id: str) -> None:
        await self.redis.delete(self._key(owner_id))
