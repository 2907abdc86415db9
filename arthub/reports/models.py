"""Admin event reports.

Reports are written per event at ``adminreports/{event_id}``::

    title, bannerImageUrl, mostLikedArtist : str
    interestedCount, rsvpCount             : int
    confirmedVisitors                      : [str] or {key: str}
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from arthub.store.records import DecodeError, DecodeOk, malformed


REPORTS_PATH = "adminreports"


@dataclass(frozen=True)
class EventReport:
    """Engagement summary of one event."""

    event_id: str
    title: str = ""
    banner_image_url: str = ""
    interested_count: int = 0
    rsvp_count: int = 0
    most_liked_artist: str = ""
    confirmed_visitors: tuple[str, ...] = field(default_factory=tuple)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _count(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0
    return max(0, int(value))


def _visitors(value: Any) -> tuple[str, ...]:
    """Visitor names from either a list or a keyed object."""
    if isinstance(value, list):
        return tuple(v for v in value if isinstance(v, str))
    if isinstance(value, Mapping):
        return tuple(v for _, v in sorted(value.items()) if isinstance(v, str))
    return ()


def decode_report(event_id: str, node: Any) -> DecodeOk[EventReport] | DecodeError:
    """Decode a report; missing fields fall back to empty values."""
    if not isinstance(node, Mapping):
        return malformed(event_id, "report node is not an object")

    return DecodeOk(
        EventReport(
            event_id=event_id,
            title=_text(node.get("title")),
            banner_image_url=_text(node.get("bannerImageUrl")),
            interested_count=_count(node.get("interestedCount")),
            rsvp_count=_count(node.get("rsvpCount")),
            most_liked_artist=_text(node.get("mostLikedArtist")),
            confirmed_visitors=_visitors(node.get("confirmedVisitors")),
        )
    )
