"""Status-change detection and notification dispatch.

Business logic for:
- Detecting invitation status transitions against the last-observed cache
- Turning transitions into user-facing notifications
"""

import asyncio

import structlog

from .cache import StatusCache
from .models import InvitationStatus, LocalNotification, StatusChanged, notification_for
from .sinks import NotificationSink


logger = structlog.get_logger(__name__)


class NotificationDispatcher:
    """Selects notification copy for a transition and delivers it."""

    def __init__(self, sink: NotificationSink):
        self.sink = sink

    async def dispatch(
        self, owner_id: str, event: StatusChanged
    ) -> LocalNotification | None:
        notification = notification_for(event)
        if notification is None:
            return None

        await self.sink.deliver(owner_id, notification, event)
        logger.info(
            "notification_dispatched",
            owner_id=owner_id,
            subject_id=event.subject_id,
            status=event.current.value,
        )
        return notification


class StatusChangeCoordinator:
    """Single writer of the last-observed status cache.

    Every watcher routes observations through one coordinator, so a
    transition is emitted exactly once no matter how many watchers see it.
    The first observation of a subject only seeds the cache.
    """

    def __init__(self, cache: StatusCache, dispatcher: NotificationDispatcher):
        self.cache = cache
        self.dispatcher = dispatcher
        self._lock = asyncio.Lock()

    async def observe(
        self, owner_id: str, subject_id: str, status: InvitationStatus
    ) -> StatusChanged | None:
        """Record an observed status and emit a transition when it changed."""
        async with self._lock:
            previous = await self.cache.get(owner_id, subject_id)
            if previous == status:
                return None

            await self.cache.set(owner_id, subject_id, status)

            if previous == InvitationStatus.UNKNOWN:
                logger.debug(
                    "status_first_observed",
                    owner_id=owner_id,
                    subject_id=subject_id,
                    status=status.value,
                )
                return None

            event = StatusChanged(subject_id=subject_id, previous=previous, current=status)

        logger.info(
            "invitation_status_changed",
            owner_id=owner_id,
            subject_id=subject_id,
            previous=previous.value,
            current=status.value,
        )
        await self.dispatcher.dispatch(owner_id, event)
        return event
