"""Comment tree builder.

Turns a raw snapshot of ``comment_id -> node`` (each node optionally holding a
``replies`` collection of the same shape) into ordered ``Comment`` trees.

Policy for malformed nodes: the node is dropped together with its whole reply
subtree. Replies are never promoted to the parent level.
"""

from typing import Any

import structlog

from arthub.store.records import DecodeError, iter_children

from .decoding import decode_comment_record
from .models import REPLIES_KEY, Comment


logger = structlog.get_logger(__name__)


def build_comment_tree(snapshot: Any) -> list[Comment]:
    """Build ordered root comments, each with its replies built recursively.

    Pure and best-effort: bad nodes are skipped, the build never fails.
    """
    comments: list[Comment] = []

    for key, node in iter_children(snapshot):
        result = decode_comment_record(key, node)
        if isinstance(result, DecodeError):
            logger.debug(
                "comment_record_dropped",
                comment_id=key,
                fields=result.error.fields,
                reason=result.error.reason,
            )
            continue

        record = result.value
        replies = build_comment_tree(node.get(REPLIES_KEY))
        comments.append(
            Comment(
                id=key,
                text=record.text,
                author_id=record.author_id,
                timestamp_millis=record.timestamp_millis,
                replies=tuple(replies),
            )
        )

    comments.sort(key=lambda comment: comment.sort_key)
    return comments


def count_comments(comments: list[Comment] | tuple[Comment, ...]) -> int:
    """Total number of comments in the forest, replies included."""
    return sum(1 + count_comments(comment.replies) for comment in comments)


def find_comment(
    comments: list[Comment] | tuple[Comment, ...], comment_id: str
) -> Comment | None:
    """Depth-first lookup by id."""
    for comment in comments:
        if comment.id == comment_id:
            return comment
        found = find_comment(comment.replies, comment_id)
        if found is not None:
            return found
    return None
