"""Invitation status tracking and notification fan-out."""

from .cache import MemoryStatusCache, RedisStatusCache, StatusCache
from .models import (
    InvitationStatus,
    LocalNotification,
    StatusChanged,
    notification_for,
    parse_status,
)
from .service import NotificationDispatcher, StatusChangeCoordinator
from .sinks import MemoryNotificationSink, NotificationSink, RedisNotificationSink
from .watcher import InvitationStatusWatcher, WatchLimitError


__all__ = [
    "InvitationStatus",
    "InvitationStatusWatcher",
    "LocalNotification",
    "MemoryNotificationSink",
    "MemoryStatusCache",
    "NotificationDispatcher",
    "NotificationSink",
    "RedisNotificationSink",
    "RedisStatusCache",
    "StatusCache",
    "StatusChangeCoordinator",
    "StatusChanged",
    "WatchLimitError",
    "notification_for",
    "parse_status",
]
