"""Invitation records.

An artist applies to exhibit at an event; the record lives at
``invitations/{event_id}/{artist_id}`` and is never deleted::

    artistName : str   (email local part at application time)
    email      : str
    status     : pending | accepted | rejected
    appliedAt  : int   (epoch seconds)
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from arthub.notifications.models import InvitationStatus, parse_status
from arthub.store.records import DecodeError, DecodeOk, malformed


INVITATIONS_PATH = "invitations"
EVENTS_PATH = "events"

# Statuses an admin may set
DECISION_STATUSES = frozenset({InvitationStatus.ACCEPTED, InvitationStatus.REJECTED})


@dataclass(frozen=True)
class Invitation:
    """One artist's application to one event."""

    event_id: str
    artist_id: str
    artist_name: str
    email: str
    status: InvitationStatus
    applied_at: int
    event_title: str = ""

    @property
    def id(self) -> str:
        return f"{self.event_id}_{self.artist_id}"

    @property
    def applied_at_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.applied_at, tz=UTC)


def create_invitation_payload(email: str, applied_at: int) -> dict[str, Any]:
    """Stored record for a new application."""
    return {
        "artistName": email.split("@")[0] if email else "Artist",
        "email": email,
        "status": InvitationStatus.PENDING.value,
        "appliedAt": applied_at,
    }


def _seconds(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0
    return max(0, int(value))


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def decode_invitation(
    event_id: str, artist_id: str, node: Any
) -> DecodeOk[Invitation] | DecodeError:
    """Decode one stored record; only the status is required."""
    key = f"{event_id}/{artist_id}"
    if not isinstance(node, Mapping):
        return malformed(key, "invitation node is not an object")

    status = parse_status(node.get("status"))
    if status is None:
        return malformed(key, "unrecognized status", ("status",))

    return DecodeOk(
        Invitation(
            event_id=event_id,
            artist_id=artist_id,
            artist_name=_text(node.get("artistName")),
            email=_text(node.get("email")),
            status=status,
            applied_at=_seconds(node.get("appliedAt")),
        )
    )


def event_titles(events: Any) -> dict[str, str]:
    """Map event ids to titles from an ``events`` snapshot."""
    titles = {}
    if isinstance(events, Mapping):
        for event_id, event in events.items():
            if isinstance(event, Mapping) and isinstance(event.get("title"), str):
                titles[str(event_id)] = event["title"]
    return titles
