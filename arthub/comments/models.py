"""Comment entities and store layout.

Comments live in a denormalized tree under the subject they belong to::

    {collection}/{subject_id}/{comment_id}
        comment | text | reply : str       (legacy text aliases)
        userId | userEmail      : str       (author aliases)
        timestamp               : int millis (or the server placeholder)
        replies/{reply_id}/...  : same shape, unbounded depth

Comments are immutable once written: there is no edit or delete.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from arthub.store.paths import SERVER_TIMESTAMP, validate_key


REPLIES_KEY = "replies"

# Field-name aliases in resolution order
TEXT_ALIASES = ("comment", "text", "reply")
AUTHOR_ALIASES = ("userId", "userEmail")
TIMESTAMP_FIELD = "timestamp"


class CommentCollection(str, Enum):
    """Top-level collections holding comment trees."""

    ARTWORK = "comments"
    EVENT = "eventComments"


@dataclass(frozen=True)
class CommentRecord:
    """One decoded node, before its replies are attached."""

    text: str
    author_id: str
    timestamp_millis: int


@dataclass(frozen=True)
class Comment:
    """A comment with its immediate replies, recursively."""

    id: str
    text: str
    author_id: str
    timestamp_millis: int
    replies: tuple["Comment", ...] = ()

    @property
    def created_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp_millis / 1000, tz=UTC)

    @property
    def sort_key(self) -> tuple[int, str]:
        """Siblings order by timestamp, then id for determinism."""
        return (self.timestamp_millis, self.id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (recursively)."""
        return {
            "id": self.id,
            "text": self.text,
            "author_id": self.author_id,
            "timestamp": self.timestamp_millis,
            "replies": [reply.to_dict() for reply in self.replies],
        }


@dataclass(frozen=True)
class CommentAuthor:
    """Identity of the user writing a comment."""

    user_id: str
    email: str | None = None


def create_comment_payload(author: CommentAuthor, text: str) -> dict[str, Any]:
    """Build the stored record for a new comment or reply.

    Both author fields are written so clients reading either alias resolve it;
    the timestamp is assigned by the store on write.
    """
    payload: dict[str, Any] = {
        "comment": text,
        "userId": author.user_id,
        TIMESTAMP_FIELD: SERVER_TIMESTAMP,
    }
    if author.email:
        payload["userEmail"] = author.email
    return payload


def comment_path(collection: CommentCollection, subject_id: str, *chain: str) -> str:
    """Path of a node given the chain of comment ids from the root.

    ``comment_path(c, "a1", "c1", "r1")`` is ``comments/a1/c1/replies/r1``.
    """
    parts = [collection.value, validate_key(subject_id)]
    for index, comment_id in enumerate(chain):
        if index:
            parts.append(REPLIES_KEY)
        parts.append(validate_key(comment_id))
    return "/".join(parts)
