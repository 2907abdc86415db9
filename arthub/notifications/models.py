"""Invitation status state machine and notification copy.

Each tracked invitation moves through ``unknown -> pending -> accepted |
rejected``. ``unknown`` only ever exists in the last-observed cache.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class InvitationStatus(str, Enum):
    """Lifecycle of an artist's application to an event."""

    UNKNOWN = "unknown"
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


# Statuses that may appear in stored invitation records
STORED_STATUSES = frozenset(
    {InvitationStatus.PENDING, InvitationStatus.ACCEPTED, InvitationStatus.REJECTED}
)


def parse_status(value: Any) -> InvitationStatus | None:
    """Map a stored status string; ``None`` for anything not storable."""
    if not isinstance(value, str):
        return None
    try:
        status = InvitationStatus(value.strip().lower())
    except ValueError:
        return None
    return status if status in STORED_STATUSES else None


@dataclass(frozen=True)
class StatusChanged:
    """A transition observed after the first sighting of a subject."""

    subject_id: str
    previous: InvitationStatus
    current: InvitationStatus

    def to_dict(self) -> dict[str, str]:
        return {
            "subject_id": self.subject_id,
            "previous": self.previous.value,
            "current": self.current.value,
        }


@dataclass(frozen=True)
class LocalNotification:
    """User-facing notification content."""

    title: str
    body: str


_NOTIFICATION_COPY: dict[InvitationStatus, LocalNotification] = {
    InvitationStatus.ACCEPTED: LocalNotification(
        title="Invitation Accepted",
        body="Congratulations! Your application to exhibit at the event was accepted.",
    ),
    InvitationStatus.REJECTED: LocalNotification(
        title="Invitation Update",
        body="Unfortunately, your application to exhibit at the event was not accepted.",
    ),
}


def notification_for(event: StatusChanged) -> LocalNotification | None:
    """Copy for a transition; other target statuses produce nothing."""
    return _NOTIFICATION_COPY.get(event.current)
