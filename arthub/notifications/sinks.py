"""Notification delivery sinks."""

import json
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog
from redis.exceptions import RedisError

from arthub.core.redis import notification_channel

from .models import LocalNotification, StatusChanged


if TYPE_CHECKING:
    from redis.asyncio import Redis


logger = structlog.get_logger(__name__)


class NotificationSink(ABC):
    """Hands a notification over for presentation to one user."""

    @abstractmethod
    async def deliver(
        self, owner_id: str, notification: LocalNotification, event: StatusChanged
    ) -> None: ...


class MemoryNotificationSink(NotificationSink):
    """Keeps delivered notifications in a list."""

    def __init__(self) -> None:
        self.delivered: list[tuple[str, LocalNotification]] = []

    async def deliver(
        self, owner_id: str, notification: LocalNotification, event: StatusChanged
    ) -> None:
        self.delivered.append((owner_id, notification))

    def for_owner(self, owner_id: str) -> list[LocalNotification]:
        return [n for owner, n in self.delivered if owner == owner_id]


class RedisNotificationSink(NotificationSink):
    """Publishes notifications on the user's Redis Pub/Sub channel."""

    def __init__(self, redis: "Redis", channel_prefix: str = "notifications:user"):
        self.redis = redis
        self.channel_prefix = channel_prefix

    async def deliver(
        self, owner_id: str, notification: LocalNotification, event: StatusChanged
    ) -> None:
        channel = notification_channel(self.channel_prefix, owner_id)
        message = {
            "type": "invitation_status",
            "data": {
                "title": notification.title,
                "body": notification.body,
                "event": event.to_dict(),
                "created_at": datetime.now(UTC).isoformat(),
            },
        }

        # Non-critical: a failed publish must not break status tracking
        try:
            await self.redis.publish(channel, json.dumps(message))
        except RedisError as e:
            logger.warning(
                "notification_publish_failed", owner_id=owner_id, error=str(e)
            )
