"""Path and tree helpers for the tree-shaped realtime store.

Paths are slash-separated keys (``invitations/e1/u1``). Values follow the
Realtime Database model: a ``None`` write deletes, and parents left empty by a
delete disappear with it.
"""

import re
import time
from copy import deepcopy
from typing import Any

from .errors import InvalidKeyError


SERVER_TIMESTAMP: dict[str, str] = {".sv": "timestamp"}

# Characters Firebase rejects inside a single key
_INVALID_KEY_CHARS = re.compile(r"[.$#\[\]/]")


def split_path(path: str) -> list[str]:
    """Split a path into its keys, ignoring leading/trailing slashes."""
    return [part for part in path.strip("/").split("/") if part]


def validate_key(key: str) -> str:
    """Validate a single path segment supplied by a caller.

    Raises:
        InvalidKeyError: If the key is empty or contains a reserved character.
    """
    if not key or _INVALID_KEY_CHARS.search(key):
        raise InvalidKeyError(key)
    return key


def child_path(*parts: str) -> str:
    """Join validated keys into a path."""
    return "/".join(validate_key(part) for part in parts)


def is_server_timestamp(value: Any) -> bool:
    return isinstance(value, dict) and value == SERVER_TIMESTAMP


def now_millis() -> int:
    return int(time.time() * 1000)


def resolve_server_values(value: Any, timestamp_millis: int | None = None) -> Any:
    """Replace server-timestamp placeholders the way the server does on write."""
    if timestamp_millis is None:
        timestamp_millis = now_millis()
    if is_server_timestamp(value):
        return timestamp_millis
    if isinstance(value, dict):
        return {
            k: resolve_server_values(v, timestamp_millis) for k, v in value.items()
        }
    return value


def normalize(value: Any) -> Any:
    """Drop ``None`` leaves and empty containers, as the database does."""
    if isinstance(value, dict):
        cleaned = {}
        for key, child in value.items():
            child = normalize(child)
            if child is not None:
                cleaned[str(key)] = child
        return cleaned or None
    if isinstance(value, list):
        return normalize({str(i): child for i, child in enumerate(value)})
    return value


def get_at(tree: Any, parts: list[str]) -> Any:
    """Return a deep copy of the value at ``parts`` or ``None``."""
    node = tree
    for part in parts:
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return deepcopy(node)


def set_at(tree: dict[str, Any] | None, parts: list[str], value: Any) -> Any:
    """Return ``tree`` with ``value`` written at ``parts``.

    The root may be replaced entirely, so callers must keep the return value.
    """
    value = normalize(deepcopy(value))
    if not parts:
        return value

    root = tree if isinstance(tree, dict) else {}
    trail: list[tuple[dict[str, Any], str]] = []
    node = root
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        trail.append((node, part))
        node = child

    if value is None:
        node.pop(parts[-1], None)
    else:
        node[parts[-1]] = value

    # Prune parents emptied by a delete
    for parent, key in reversed(trail):
        if parent[key]:
            break
        del parent[key]

    return root or None


def is_related(a: list[str], b: list[str]) -> bool:
    """True when one path is an ancestor of (or equal to) the other."""
    shortest = min(len(a), len(b))
    return a[:shortest] == b[:shortest]


def apply_event(mirror: Any, event_type: str, parts: list[str], data: Any) -> Any:
    """Apply a streamed ``put``/``patch`` event to a local mirror of a subtree."""
    if event_type == "patch" and isinstance(data, dict):
        for key, child in data.items():
            mirror = set_at(mirror, parts + split_path(key), child)
        return mirror
    return set_at(mirror, parts, data)
