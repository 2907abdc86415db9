"""Decoding of raw comment nodes.

All legacy field-name aliasing and timestamp coercion lives here. Each alias
is tried in order and the first usable value wins (a non-empty string for
text and author), so a record with ``comment: null, text: "hi"`` still
decodes.
"""

import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from arthub.store.paths import is_server_timestamp, now_millis
from arthub.store.records import DecodeError, DecodeOk, malformed, malformed_from_validation

from .models import AUTHOR_ALIASES, TEXT_ALIASES, TIMESTAMP_FIELD, CommentRecord


def first_text(node: Mapping[str, Any], aliases: tuple[str, ...]) -> str | None:
    """Return the first alias holding a non-empty string."""
    for alias in aliases:
        value = node.get(alias)
        if isinstance(value, str) and value:
            return value
    return None


def coerce_timestamp_millis(value: Any) -> int:
    """Accept integer millis, float millis, or the server placeholder.

    Raises:
        ValueError: For anything else, including booleans and negatives.
    """
    if is_server_timestamp(value):
        # Local echo of a pending write; the server will stamp it with its clock
        return now_millis()
    if isinstance(value, bool):
        msg = "timestamp must be a number"
        raise ValueError(msg)
    if isinstance(value, int):
        millis = value
    elif isinstance(value, float) and math.isfinite(value):
        millis = int(value)
    else:
        msg = "timestamp must be a number of milliseconds"
        raise ValueError(msg)
    if millis < 0:
        msg = "timestamp cannot be negative"
        raise ValueError(msg)
    return millis


class CommentNodeSchema(BaseModel):
    """Validated view of one stored comment node."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    text: str = Field(..., min_length=1)
    author_id: str = Field(..., min_length=1)
    timestamp_millis: int

    @model_validator(mode="before")
    @classmethod
    def resolve_aliases(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        return {
            "text": first_text(data, TEXT_ALIASES),
            "author_id": first_text(data, AUTHOR_ALIASES),
            "timestamp_millis": data.get(TIMESTAMP_FIELD),
        }

    @field_validator("timestamp_millis", mode="before")
    @classmethod
    def validate_timestamp(cls, v: Any) -> int:
        return coerce_timestamp_millis(v)


def decode_comment_record(key: str, node: Any) -> DecodeOk[CommentRecord] | DecodeError:
    """Decode one raw node into a CommentRecord without raising."""
    if not isinstance(node, Mapping):
        return malformed(key, "comment node is not an object")

    try:
        schema = CommentNodeSchema.model_validate(node)
    except ValidationError as e:
        return malformed_from_validation(key, e)

    return DecodeOk(
        CommentRecord(
            text=schema.text,
            author_id=schema.author_id,
            timestamp_millis=schema.timestamp_millis,
        )
    )
