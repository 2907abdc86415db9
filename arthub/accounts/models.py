"""Account entities and role tables.

The unified record lives at ``accounts/{uid}`` = ``{email, role}``. Older
clients wrote roles to three separate tables which are still read as a
fallback, in priority order: ``users``, ``admin``, ``visitors``.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


ACCOUNTS_PATH = "accounts"
ARTISTS_PATH = "artists"


class Role(str, Enum):
    """Account roles."""

    VISITOR = "visitor"
    ARTIST = "artist"
    ADMIN = "admin"


# Legacy tables in lookup priority; the last one carries no role field
LEGACY_ROLE_TABLES: tuple[str, ...] = ("users", "admin", "visitors")
VISITORS_TABLE = "visitors"


@dataclass(frozen=True)
class Account:
    """Resolved identity of a user."""

    uid: str
    email: str
    role: Role
    source: str = ACCOUNTS_PATH

    def to_dict(self) -> dict[str, Any]:
        return {"uid": self.uid, "email": self.email, "role": self.role.value}


def parse_role(value: Any) -> Role | None:
    """Lowercase and map a stored role string; unknown roles give ``None``."""
    if not isinstance(value, str):
        return None
    try:
        return Role(value.strip().lower())
    except ValueError:
        return None


def decode_account(uid: str, node: Any, source: str) -> Account | None:
    """Decode one role-table node.

    Entries in the visitors table have no role field and default to visitor.
    """
    if not isinstance(node, Mapping):
        return None

    role = parse_role(node.get("role"))
    if role is None and source == VISITORS_TABLE:
        role = Role.VISITOR
    if role is None:
        return None

    email = node.get("email")
    return Account(
        uid=uid,
        email=email if isinstance(email, str) else "",
        role=role,
        source=source,
    )


def default_artist_profile(email: str) -> dict[str, Any]:
    """Profile seeded for a newly registered artist."""
    return {
        "email": email,
        "bio": "",
        "name": email.split("@")[0] or "Artist",
        "profileImageUrl": "",
        "socialLinks": {"instagram": "", "website": ""},
    }
