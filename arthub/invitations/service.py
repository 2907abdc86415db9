"""Invitation service layer.

Business logic for:
- Artist applications to events
- Admin accept/reject decisions
- Listing applications for review
"""

import asyncio
import time
from dataclasses import replace
from typing import Any

import structlog

from arthub.notifications.models import InvitationStatus
from arthub.store import RealtimeStore, child_path
from arthub.store.records import DecodeError, iter_children

from .models import (
    DECISION_STATUSES,
    EVENTS_PATH,
    INVITATIONS_PATH,
    Invitation,
    create_invitation_payload,
    decode_invitation,
    event_titles,
)


logger = structlog.get_logger(__name__)


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class InvitationError(Exception):
    """Base invitation error."""

    def __init__(self, message: str, code: str = "invitation_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class InvitationNotFoundError(InvitationError):
    """No application exists for the event and artist."""

    def __init__(self, message: str = "Invitation not found"):
        super().__init__(message, "invitation_not_found")


class AlreadyAppliedError(InvitationError):
    """The artist already applied to the event."""

    def __init__(self, message: str = "Already applied to this event"):
        super().__init__(message, "already_applied")


class InvalidStatusError(InvitationError):
    """Status is not an admin decision."""

    def __init__(self, message: str = "Status must be accepted or rejected"):
        super().__init__(message, "invalid_status")


# ==============================================================================
# Invitation Service
# ==============================================================================


class InvitationService:
    """Service for event applications."""

    def __init__(self, store: RealtimeStore):
        self.store = store

    async def apply(self, event_id: str, artist_id: str, email: str) -> Invitation:
        """Create a pending application.

        Raises:
            AlreadyAppliedError: If the artist already has a record for the event.
        """
        path = child_path(INVITATIONS_PATH, event_id, artist_id)
        payload = create_invitation_payload(email, int(time.time()))
        existed = False

        def create_if_absent(current: Any) -> Any:
            nonlocal existed
            existed = current is not None
            return current if existed else payload

        await self.store.transaction(path, create_if_absent)
        if existed:
            raise AlreadyAppliedError

        logger.info("invitation_applied", event_id=event_id, artist_id=artist_id)
        return Invitation(
            event_id=event_id,
            artist_id=artist_id,
            artist_name=payload["artistName"],
            email=email,
            status=InvitationStatus.PENDING,
            applied_at=payload["appliedAt"],
        )

    async def update_status(
        self, event_id: str, artist_id: str, status: InvitationStatus
    ) -> None:
        """Record an admin decision on an application.

        Raises:
            InvalidStatusError: If ``status`` is not accepted or rejected.
            InvitationNotFoundError: If there is no application.
        """
        if status not in DECISION_STATUSES:
            raise InvalidStatusError

        path = child_path(INVITATIONS_PATH, event_id, artist_id)
        if await self.store.get(path) is None:
            raise InvitationNotFoundError

        await self.store.update(path, {"status": status.value})
        logger.info(
            "invitation_status_updated",
            event_id=event_id,
            artist_id=artist_id,
            status=status.value,
        )

    async def list_invitations(self) -> list[Invitation]:
        """All applications, newest first, with event titles resolved."""
        snapshot, events = await asyncio.gather(
            self.store.get(INVITATIONS_PATH),
            self.store.get(EVENTS_PATH),
        )
        titles = event_titles(events)

        invitations = []
        for event_id, applicants in iter_children(snapshot):
            for artist_id, node in iter_children(applicants):
                result = decode_invitation(event_id, artist_id, node)
                if isinstance(result, DecodeError):
                    logger.debug(
                        "invitation_record_dropped",
                        key=result.error.key,
                        reason=result.error.reason,
                    )
                    continue
                invitations.append(
                    replace(result.value, event_title=titles.get(event_id, event_id))
                )

        invitations.sort(key=lambda i: (-i.applied_at, i.event_id, i.artist_id))
        return invitations

    async def applied_event_ids(self, artist_id: str) -> set[str]:
        """Events the artist has applied to, whatever the status."""
        snapshot = await self.store.get(INVITATIONS_PATH)
        return {
            event_id
            for event_id, applicants in iter_children(snapshot)
            if any(key == artist_id for key, _ in iter_children(applicants))
        }
