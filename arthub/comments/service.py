"""Comment system service layer.

Business logic for:
- Reading a subject's comment thread as an ordered tree
- Posting root comments and replies at any depth
"""

from collections.abc import Mapping, Sequence

import structlog

from arthub.store import RealtimeStore

from .models import (
    REPLIES_KEY,
    Comment,
    CommentAuthor,
    CommentCollection,
    comment_path,
    create_comment_payload,
)
from .tree import build_comment_tree, count_comments


logger = structlog.get_logger(__name__)


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class CommentError(Exception):
    """Base comment error."""

    def __init__(self, message: str, code: str = "comment_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class CommentNotFoundError(CommentError):
    """Parent comment not found."""

    def __init__(self, message: str = "Comment not found"):
        super().__init__(message, "comment_not_found")


class EmptyCommentError(CommentError):
    """Comment text is empty after stripping whitespace."""

    def __init__(self, message: str = "Comment text cannot be empty"):
        super().__init__(message, "empty_comment")


# ==============================================================================
# Comment Service
# ==============================================================================


def clean_text(text: str) -> str:
    """Strip the text and reject it when nothing is left."""
    cleaned = text.strip()
    if not cleaned:
        raise EmptyCommentError
    return cleaned


class CommentService:
    """Service for comment threads on artworks and events."""

    def __init__(self, store: RealtimeStore):
        self.store = store

    async def get_thread(
        self, collection: CommentCollection, subject_id: str
    ) -> list[Comment]:
        """Load and build the full comment tree of a subject."""
        snapshot = await self.store.get(comment_path(collection, subject_id))
        comments = build_comment_tree(snapshot)

        logger.debug(
            "comment_thread_loaded",
            collection=collection.value,
            subject_id=subject_id,
            total=count_comments(comments),
        )
        return comments

    async def add_comment(
        self,
        collection: CommentCollection,
        subject_id: str,
        author: CommentAuthor,
        text: str,
    ) -> str:
        """Post a root comment and return its generated id."""
        cleaned = clean_text(text)
        path = comment_path(collection, subject_id)

        comment_id = await self.store.push(path, create_comment_payload(author, cleaned))

        logger.info(
            "comment_created",
            collection=collection.value,
            subject_id=subject_id,
            comment_id=comment_id,
            author_id=author.user_id,
        )
        return comment_id

    async def add_reply(
        self,
        collection: CommentCollection,
        subject_id: str,
        parent_path: Sequence[str],
        author: CommentAuthor,
        text: str,
    ) -> str:
        """Post a reply under the comment reached by ``parent_path``.

        ``parent_path`` lists comment ids from the root comment down to the
        parent being answered.

        Raises:
            EmptyCommentError: If the text is blank.
            CommentNotFoundError: If the parent does not exist.
        """
        cleaned = clean_text(text)
        if not parent_path:
            msg = "Reply needs a parent comment"
            raise CommentNotFoundError(msg)

        parent = comment_path(collection, subject_id, *parent_path)
        node = await self.store.get(parent)
        if not isinstance(node, Mapping):
            raise CommentNotFoundError

        reply_id = await self.store.push(
            f"{parent}/{REPLIES_KEY}", create_comment_payload(author, cleaned)
        )

        logger.info(
            "comment_reply_created",
            collection=collection.value,
            subject_id=subject_id,
            parent_id=parent_path[-1],
            depth=len(parent_path),
            comment_id=reply_id,
            author_id=author.user_id,
        )
        return reply_id
