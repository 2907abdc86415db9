"""Comment thread API endpoints.

Provides routes for:
- Reading the ordered comment tree of an artwork or event
- Posting root comments and replies
"""

import structlog
from fastapi import APIRouter, status

from arthub.auth.dependencies import CurrentUser
from arthub.store import StoreError

from .dependencies import CommentServiceDep, handle_comment_error
from .models import CommentAuthor, CommentCollection
from .schemas import (
    CommentCreatedResponse,
    CommentResponse,
    CommentThreadResponse,
    CreateCommentRequest,
    CreateReplyRequest,
)
from .service import CommentError
from .tree import count_comments


logger = structlog.get_logger(__name__)


router = APIRouter(prefix="/v1/comments", tags=["comments"])


@router.get(
    "/{collection}/{subject_id}",
    response_model=CommentThreadResponse,
    summary="Get comment thread",
)
async def get_thread(
    collection: CommentCollection,
    subject_id: str,
    comment_service: CommentServiceDep,
    _user: CurrentUser,
) -> CommentThreadResponse:
    """Get all comments of an artwork or event with nested replies.

    Siblings are ordered oldest first.
    """
    try:
        comments = await comment_service.get_thread(collection, subject_id)
    except (CommentError, StoreError) as e:
        raise handle_comment_error(e) from e

    return CommentThreadResponse(
        subject_id=subject_id,
        collection=collection.value,
        total=count_comments(comments),
        comments=[CommentResponse.from_comment(c) for c in comments],
    )


@router.post(
    "/{collection}/{subject_id}",
    response_model=CommentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post comment",
)
async def create_comment(
    collection: CommentCollection,
    subject_id: str,
    data: CreateCommentRequest,
    comment_service: CommentServiceDep,
    user: CurrentUser,
) -> CommentCreatedResponse:
    """Post a root comment."""
    try:
        comment_id = await comment_service.add_comment(
            collection,
            subject_id,
            CommentAuthor(user_id=user.uid, email=user.email),
            data.text,
        )
    except (CommentError, StoreError) as e:
        raise handle_comment_error(e) from e

    return CommentCreatedResponse(id=comment_id)


@router.post(
    "/{collection}/{subject_id}/replies",
    response_model=CommentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Reply to comment",
)
async def create_reply(
    collection: CommentCollection,
    subject_id: str,
    data: CreateReplyRequest,
    comment_service: CommentServiceDep,
    user: CurrentUser,
) -> CommentCreatedResponse:
    """Reply to the comment at the end of ``parent_path``."""
    try:
        reply_id = await comment_service.add_reply(
            collection,
            subject_id,
            data.parent_path,
            CommentAuthor(user_id=user.uid, email=user.email),
            data.text,
        )
    except (CommentError, StoreError) as e:
        raise handle_comment_error(e) from e

    return CommentCreatedResponse(id=reply_id)
