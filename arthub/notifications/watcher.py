"""Invitation status watchers.

``check_once`` reads the invitations tree a single time; ``start`` keeps a
subscription open and observes every snapshot. Both feed the same
coordinator.
"""

from collections.abc import Iterator, Mapping
from typing import Any

import structlog

from arthub.store import RealtimeStore, Subscription, validate_key
from arthub.store.records import iter_children

from .models import InvitationStatus, StatusChanged, parse_status
from .service import StatusChangeCoordinator


logger = structlog.get_logger(__name__)

INVITATIONS_PATH = "invitations"


def iter_artist_statuses(
    snapshot: Any, artist_id: str
) -> Iterator[tuple[str, InvitationStatus]]:
    """Yield ``(event_id, status)`` for every event the artist applied to.

    Records with an unrecognized status are skipped.
    """
    for event_id, applicants in iter_children(snapshot):
        for applicant_id, record in iter_children(applicants):
            if applicant_id != artist_id or not isinstance(record, Mapping):
                continue
            status = parse_status(record.get("status"))
            if status is None:
                logger.debug(
                    "invitation_status_unrecognized",
                    event_id=event_id,
                    artist_id=artist_id,
                    value=str(record.get("status")),
                )
                continue
            yield event_id, status


class WatchLimitError(Exception):
    """Too many artists are already being watched."""

    def __init__(self, limit: int) -> None:
        self.message = f"Status watch limit of {limit} reached"
        self.code = "watch_limit_reached"
        self.limit = limit
        super().__init__(self.message)


class InvitationStatusWatcher:
    """Watches an artist's invitations and reports transitions."""

    def __init__(
        self,
        store: RealtimeStore,
        coordinator: StatusChangeCoordinator,
        max_watchers: int = 1000,
    ):
        self.store = store
        self.coordinator = coordinator
        self.max_watchers = max_watchers
        self._subscriptions: dict[str, Subscription] = {}

    async def _observe_snapshot(self, artist_id: str, snapshot: Any) -> list[StatusChanged]:
        events = []
        for event_id, status in iter_artist_statuses(snapshot, artist_id):
            changed = await self.coordinator.observe(artist_id, event_id, status)
            if changed is not None:
                events.append(changed)
        return events

    async def check_once(self, artist_id: str) -> list[StatusChanged]:
        """Read all invitations once and return the transitions observed."""
        validate_key(artist_id)
        snapshot = await self.store.get(INVITATIONS_PATH)
        return await self._observe_snapshot(artist_id, snapshot)

    def start(self, artist_id: str) -> Subscription:
        """Observe the artist's invitations continuously.

        A second start for the same artist reuses the open subscription.

        Raises:
            WatchLimitError: If ``max_watchers`` artists are already watched.
        """
        validate_key(artist_id)
        existing = self._subscriptions.get(artist_id)
        if existing is not None:
            return existing
        if len(self._subscriptions) >= self.max_watchers:
            raise WatchLimitError(self.max_watchers)

        async def on_snapshot(snapshot: Any) -> None:
            try:
                await self._observe_snapshot(artist_id, snapshot)
            except Exception:
                logger.exception("invitation_snapshot_failed", artist_id=artist_id)

        subscription = self.store.subscribe(INVITATIONS_PATH, on_snapshot)
        self._subscriptions[artist_id] = subscription
        logger.info("invitation_watch_started", artist_id=artist_id)
        return subscription

    def stop(self, artist_id: str | None = None) -> None:
        """Close one artist's subscription, or all of them."""
        artist_ids = [artist_id] if artist_id is not None else list(self._subscriptions)
        for key in artist_ids:
            subscription = self._subscriptions.pop(key, None)
            if subscription is not None:
                subscription.close()
                logger.info("invitation_watch_stopped", artist_id=key)

    @property
    def watching(self) -> list[str]:
        return sorted(self._subscriptions)
