"""Pydantic schemas for comment threads."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import Comment


# ==============================================================================
# Request Schemas
# ==============================================================================


class CreateCommentRequest(BaseModel):
    """Request to post a root comment."""

    text: str = Field(..., min_length=1, max_length=5000)

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Strip whitespace and validate text."""
        v = v.strip()
        if not v:
            msg = "Comment cannot be empty"
            raise ValueError(msg)
        return v


class CreateReplyRequest(CreateCommentRequest):
    """Request to reply to an existing comment."""

    parent_path: list[str] = Field(
        ...,
        min_length=1,
        description="Comment ids from the root comment down to the parent",
    )


# ==============================================================================
# Response Schemas
# ==============================================================================


class CommentResponse(BaseModel):
    """A comment with its nested replies."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    text: str
    author_id: str
    timestamp: int
    created_at: datetime
    replies: list["CommentResponse"] = Field(default_factory=list)

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentResponse":
        return cls(
            id=comment.id,
            text=comment.text,
            author_id=comment.author_id,
            timestamp=comment.timestamp_millis,
            created_at=comment.created_at,
            replies=[cls.from_comment(reply) for reply in comment.replies],
        )


class CommentThreadResponse(BaseModel):
    """Ordered root comments of a subject."""

    subject_id: str
    collection: str
    total: int
    comments: list[CommentResponse]


class CommentCreatedResponse(BaseModel):
    """Id of a newly posted comment or reply."""

    id: str
