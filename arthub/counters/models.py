"""Interaction counters and their consistency strategies.

Every counter name is bound to exactly one strategy:

- TRANSACTIONAL counters are a bare integer at ``counters/{subject}/{name}``
  changed only through store transactions.
- MEMBERSHIP counters keep ``{members: {user_id: true}, count: N}`` at
  ``engagement/{subject}/{name}``. Members and count change together in one
  transaction, so the count is always the size of the member set.

Dotted names are nested keys: ``rsvp.attending`` lives under ``rsvp/attending``.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from arthub.store import child_path


COUNTERS_PATH = "counters"
ENGAGEMENT_PATH = "engagement"
MEMBERS_KEY = "members"
COUNT_KEY = "count"


class CounterStrategy(str, Enum):
    """How a counter's value is maintained."""

    TRANSACTIONAL = "transactional"
    MEMBERSHIP = "membership"


COUNTER_REGISTRY: dict[str, CounterStrategy] = {
    "likes": CounterStrategy.MEMBERSHIP,
    "interested": CounterStrategy.MEMBERSHIP,
    "rsvp.attending": CounterStrategy.MEMBERSHIP,
    "views": CounterStrategy.TRANSACTIONAL,
    "shares": CounterStrategy.TRANSACTIONAL,
}


def strategy_for(name: str) -> CounterStrategy:
    """Registered strategy of a counter; unregistered names are transactional."""
    return COUNTER_REGISTRY.get(name, CounterStrategy.TRANSACTIONAL)


def counter_path(subject_id: str, name: str) -> str:
    root = (
        ENGAGEMENT_PATH
        if strategy_for(name) == CounterStrategy.MEMBERSHIP
        else COUNTERS_PATH
    )
    return child_path(root, subject_id, *name.split("."))


@dataclass(frozen=True)
class MembershipResult:
    """Caller's membership and the derived count after a commit."""

    active: bool
    count: int


def as_count(value: Any) -> int:
    """Read a stored counter value; anything but a non-negative int is 0."""
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(0, value)


def apply_delta(current: Any, delta: int) -> int:
    """New value of a transactional counter, clamped at zero."""
    return max(0, as_count(current) + delta)


def members_of(node: Any) -> dict[str, bool]:
    """Active members of a membership node."""
    if not isinstance(node, Mapping):
        return {}
    members = node.get(MEMBERS_KEY)
    if not isinstance(members, Mapping):
        return {}
    return {str(uid): True for uid, flag in members.items() if flag is True}


def membership_node(members: dict[str, bool]) -> dict[str, Any] | None:
    """Stored form of a member set; an empty set removes the node."""
    if not members:
        return None
    return {MEMBERS_KEY: members, COUNT_KEY: len(members)}
