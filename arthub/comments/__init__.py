"""Comment threads on artworks and events."""

from .decoding import decode_comment_record
from .models import Comment, CommentAuthor, CommentCollection
from .service import (
    CommentError,
    CommentNotFoundError,
    CommentService,
    EmptyCommentError,
)
from .tree import build_comment_tree, count_comments, find_comment


__all__ = [
    "Comment",
    "CommentAuthor",
    "CommentCollection",
    "CommentError",
    "CommentNotFoundError",
    "CommentService",
    "EmptyCommentError",
    "build_comment_tree",
    "count_comments",
    "decode_comment_record",
    "find_comment",
]
