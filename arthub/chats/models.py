"""Chat messages between two users.

A chat between users ``a`` and ``b`` lives at ``chats/{a}_{b}`` with the two
uids sorted. Messages carry the sender's role, not uid::

    chats/{chat_id}/messages/{message_id}
        message   : str
        sender    : str   (role of the author: admin | artist | visitor)
        timestamp : int millis
        isRead    : bool
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from arthub.store import child_path
from arthub.store.paths import SERVER_TIMESTAMP
from arthub.store.records import DecodeError, DecodeOk, malformed


CHATS_PATH = "chats"
MESSAGES_KEY = "messages"
CHAT_ID_SEPARATOR = "_"
CHAT_PARTICIPANTS = 2


@dataclass(frozen=True)
class ChatMessage:
    """One decoded chat message."""

    id: str
    message: str
    sender: str
    timestamp_millis: int
    is_read: bool = False

    @property
    def sort_key(self) -> tuple[int, str]:
        return (self.timestamp_millis, self.id)

    def sent_by(self, role: str) -> bool:
        return self.sender.lower() == role.lower()


@dataclass(frozen=True)
class MessageSender:
    """Someone with unread messages for the caller."""

    user_id: str
    email: str
    role: str
    chat_id: str
    unread_count: int


def chat_id_for(uid_a: str, uid_b: str) -> str:
    """Chat id shared by two users, independent of who starts it."""
    return CHAT_ID_SEPARATOR.join(sorted((uid_a, uid_b)))


def parse_chat_id(chat_id: str) -> tuple[str, str] | None:
    """Split a chat id into its two uids; ``None`` when it is not a pair."""
    parts = chat_id.split(CHAT_ID_SEPARATOR)
    if len(parts) != CHAT_PARTICIPANTS or not all(parts):
        return None
    return parts[0], parts[1]


def other_participant(chat_id: str, user_id: str) -> str | None:
    """The uid on the other side of a chat the user takes part in."""
    pair = parse_chat_id(chat_id)
    if pair is None or user_id not in pair or pair[0] == pair[1]:
        return None
    return pair[1] if pair[0] == user_id else pair[0]


def messages_path(chat_id: str) -> str:
    return child_path(CHATS_PATH, chat_id, MESSAGES_KEY)


def _millis(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return 0


def decode_chat_message(key: str, node: Any) -> DecodeOk[ChatMessage] | DecodeError:
    """Decode one stored message.

    Messages without a positive timestamp (including pending local writes)
    are rejected.
    """
    if not isinstance(node, Mapping):
        return malformed(key, "message node is not an object")

    timestamp = _millis(node.get("timestamp"))
    if timestamp <= 0:
        return malformed(key, "missing or invalid timestamp", ("timestamp",))

    message = node.get("message")
    sender = node.get("sender")
    return DecodeOk(
        ChatMessage(
            id=key,
            message=message if isinstance(message, str) else "",
            sender=sender if isinstance(sender, str) else "",
            timestamp_millis=timestamp,
            is_read=node.get("isRead") is True,
        )
    )


def create_message_payload(sender_role: str, text: str) -> dict[str, Any]:
    return {
        "message": text,
        "sender": sender_role,
        "timestamp": SERVER_TIMESTAMP,
        "isRead": False,
    }
