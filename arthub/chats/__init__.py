"""One-to-one chats and unread counts."""

from .models import ChatMessage, MessageSender, chat_id_for, parse_chat_id
from .service import (
    ChatAccessDeniedError,
    ChatError,
    ChatService,
    EmptyMessageError,
    SenderRoleUnknownError,
)


__all__ = [
    "ChatAccessDeniedError",
    "ChatError",
    "ChatMessage",
    "ChatService",
    "EmptyMessageError",
    "MessageSender",
    "SenderRoleUnknownError",
    "chat_id_for",
    "parse_chat_id",
]
