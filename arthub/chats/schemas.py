"""Pydantic schemas for chats."""

from pydantic import BaseModel, Field, field_validator

from .models import ChatMessage, MessageSender


class SendMessageRequest(BaseModel):
    """Request to post a chat message."""

    text: str = Field(..., min_length=1, max_length=2000)

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "Message cannot be empty"
            raise ValueError(msg)
        return v


class ChatMessageResponse(BaseModel):
    id: str
    message: str
    sender: str
    timestamp: int
    is_read: bool

    @classmethod
    def from_message(cls, message: ChatMessage) -> "ChatMessageResponse":
        return cls(
            id=message.id,
            message=message.message,
            sender=message.sender,
            timestamp=message.timestamp_millis,
            is_read=message.is_read,
        )


class ChatMessagesResponse(BaseModel):
    """Messages of a chat, oldest first."""

    chat_id: str
    messages: list[ChatMessageResponse]


class MessageSentResponse(BaseModel):
    id: str


class UnreadSenderResponse(BaseModel):
    user_id: str
    email: str
    role: str
    chat_id: str
    unread_count: int

    @classmethod
    def from_sender(cls, sender: MessageSender) -> "UnreadSenderResponse":
        return cls(
            user_id=sender.user_id,
            email=sender.email,
            role=sender.role,
            chat_id=sender.chat_id,
            unread_count=sender.unread_count,
        )


class UnreadSendersResponse(BaseModel):
    """Senders with unread messages, most unread first."""

    senders: list[UnreadSenderResponse]
    total_unread: int


class MarkReadResponse(BaseModel):
    marked: int
