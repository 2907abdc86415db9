"""Chat service layer.

Business logic for:
- Reading and posting chat messages
- Counting unread messages per sender across all of a user's chats
- Marking a chat as read
"""

from collections.abc import Mapping
from typing import Any

import structlog

from arthub.accounts.service import AccountService
from arthub.store import RealtimeStore
from arthub.store.records import DecodeError, iter_children

from .models import (
    CHATS_PATH,
    MESSAGES_KEY,
    ChatMessage,
    MessageSender,
    create_message_payload,
    decode_chat_message,
    messages_path,
    other_participant,
    parse_chat_id,
)


logger = structlog.get_logger(__name__)


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class ChatError(Exception):
    """Base chat error."""

    def __init__(self, message: str, code: str = "chat_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class ChatAccessDeniedError(ChatError):
    """The caller is not one of the two chat participants."""

    def __init__(self, message: str = "Not a participant of this chat"):
        super().__init__(message, "chat_access_denied")


class EmptyMessageError(ChatError):
    """Message text is empty after stripping whitespace."""

    def __init__(self, message: str = "Message cannot be empty"):
        super().__init__(message, "empty_message")


class SenderRoleUnknownError(ChatError):
    """The caller has no resolvable role to sign messages with."""

    def __init__(self, message: str = "Sender role could not be resolved"):
        super().__init__(message, "sender_role_unknown")


# ==============================================================================
# Helpers
# ==============================================================================


def decode_messages(snapshot: Any) -> list[ChatMessage]:
    """Decode a messages snapshot, dropping invalid entries, oldest first."""
    messages = []
    for key, node in iter_children(snapshot):
        result = decode_chat_message(key, node)
        if isinstance(result, DecodeError):
            logger.debug(
                "chat_message_dropped",
                message_id=key,
                reason=result.error.reason,
            )
            continue
        messages.append(result.value)

    messages.sort(key=lambda m: m.sort_key)
    return messages


def count_unread_from(messages: list[ChatMessage], sender_role: str) -> int:
    return sum(1 for m in messages if m.sent_by(sender_role) and not m.is_read)


# ==============================================================================
# Chat Service
# ==============================================================================


class ChatService:
    """Service for one-to-one chats."""

    def __init__(self, store: RealtimeStore, account_service: AccountService):
        self.store = store
        self.accounts = account_service

    def ensure_participant(self, chat_id: str, user_id: str) -> None:
        """Raise ChatAccessDeniedError unless the user is part of the chat."""
        pair = parse_chat_id(chat_id)
        if pair is None or user_id not in pair:
            raise ChatAccessDeniedError

    async def sender_role(self, user_id: str) -> str:
        """Role the user signs messages with."""
        role = await self.accounts.resolve_role(user_id)
        if role is None:
            raise SenderRoleUnknownError
        return role.value

    async def get_messages(self, chat_id: str) -> list[ChatMessage]:
        snapshot = await self.store.get(messages_path(chat_id))
        return decode_messages(snapshot)

    async def send_message(self, chat_id: str, sender_role: str, text: str) -> str:
        """Post a message and return its generated id."""
        cleaned = text.strip()
        if not cleaned:
            raise EmptyMessageError

        message_id = await self.store.push(
            messages_path(chat_id), create_message_payload(sender_role, cleaned)
        )
        logger.info(
            "chat_message_sent",
            chat_id=chat_id,
            message_id=message_id,
            sender=sender_role,
        )
        return message_id

    async def mark_read(self, chat_id: str, reader_role: str) -> int:
        """Mark every unread message from the other party as read.

        All flags change in one multi-path update. Returns how many changed.
        """
        messages = await self.get_messages(chat_id)
        unread = [m for m in messages if not m.sent_by(reader_role) and not m.is_read]
        if not unread:
            return 0

        await self.store.update(
            messages_path(chat_id), {f"{m.id}/isRead": True for m in unread}
        )
        logger.info("chat_marked_read", chat_id=chat_id, count=len(unread))
        return len(unread)

    async def unread_senders(self, user_id: str) -> list[MessageSender]:
        """People with unread messages for ``user_id``, most unread first.

        The other party of every chat is resolved concurrently, and the
        result is only built once every lookup has finished.
        """
        snapshot = await self.store.get(CHATS_PATH)

        chats: list[tuple[str, str, Any]] = []
        for chat_id, node in iter_children(snapshot):
            other_id = other_participant(chat_id, user_id)
            if other_id is None or not isinstance(node, Mapping):
                continue
            chats.append((chat_id, other_id, node.get(MESSAGES_KEY)))

        accounts = await self.accounts.resolve_many([other for _, other, _ in chats])

        senders = []
        for chat_id, other_id, messages in chats:
            account = accounts.get(other_id)
            if account is None:
                logger.debug("chat_partner_unresolved", chat_id=chat_id, uid=other_id)
                continue
            unread = count_unread_from(decode_messages(messages), account.role.value)
            if unread > 0:
                senders.append(
                    MessageSender(
                        user_id=other_id,
                        email=account.email,
                        role=account.role.value,
                        chat_id=chat_id,
                        unread_count=unread,
                    )
                )

        senders.sort(key=lambda s: (-s.unread_count, s.email))
        return senders
