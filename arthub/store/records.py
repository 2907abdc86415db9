"""Tagged results for decoding raw store records.

Decoders never raise on bad data: they return ``DecodeOk`` with the typed
value or ``DecodeError`` describing what was wrong, and the caller decides
whether to drop, log, or surface it.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import ValidationError


T = TypeVar("T")


@dataclass(frozen=True)
class MalformedRecord:
    """A stored node that is missing required fields or has unusable values."""

    key: str
    fields: tuple[str, ...]
    reason: str


@dataclass(frozen=True)
class DecodeOk(Generic[T]):
    value: T


@dataclass(frozen=True)
class DecodeError:
    error: MalformedRecord


def malformed(key: str, reason: str, fields: tuple[str, ...] = ()) -> DecodeError:
    return DecodeError(MalformedRecord(key=key, fields=fields, reason=reason))


def malformed_from_validation(key: str, exc: ValidationError) -> DecodeError:
    """Summarize a pydantic ValidationError as a MalformedRecord."""
    errors: list[dict[str, Any]] = exc.errors()
    fields = tuple(str(err["loc"][0]) for err in errors if err.get("loc"))
    reason = "; ".join(err.get("msg", "invalid value") for err in errors)
    return malformed(key, reason or "invalid record", fields)


def iter_children(snapshot: Any) -> Iterator[tuple[str, Any]]:
    """Yield ``(key, node)`` pairs of a collection snapshot.

    The Realtime Database returns a list instead of a dict when every key is a
    small integer, with ``None`` in the holes.
    """
    if isinstance(snapshot, Mapping):
        for key, node in snapshot.items():
            yield str(key), node
    elif isinstance(snapshot, list):
        for index, node in enumerate(snapshot):
            if node is not None:
                yield str(index), node
