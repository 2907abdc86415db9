"""Chat API endpoints."""

import structlog
from fastapi import APIRouter, status

from arthub.auth.dependencies import CurrentUser
from arthub.store import StoreError

from .dependencies import ChatServiceDep, handle_chat_error
from .schemas import (
    ChatMessageResponse,
    ChatMessagesResponse,
    MarkReadResponse,
    MessageSentResponse,
    SendMessageRequest,
    UnreadSenderResponse,
    UnreadSendersResponse,
)
from .service import ChatError


logger = structlog.get_logger(__name__)


router = APIRouter(prefix="/v1/chats", tags=["chats"])


@router.get(
    "/unread",
    response_model=UnreadSendersResponse,
    summary="Users with unread messages for me",
)
async def get_unread_senders(
    chat_service: ChatServiceDep,
    user: CurrentUser,
) -> UnreadSendersResponse:
    try:
        senders = await chat_service.unread_senders(user.uid)
    except (ChatError, StoreError) as e:
        raise handle_chat_error(e) from e

    return UnreadSendersResponse(
        senders=[UnreadSenderResponse.from_sender(s) for s in senders],
        total_unread=sum(s.unread_count for s in senders),
    )


@router.get(
    "/{chat_id}/messages",
    response_model=ChatMessagesResponse,
    summary="Get chat messages",
)
async def get_messages(
    chat_id: str,
    chat_service: ChatServiceDep,
    user: CurrentUser,
) -> ChatMessagesResponse:
    try:
        chat_service.ensure_participant(chat_id, user.uid)
        messages = await chat_service.get_messages(chat_id)
    except (ChatError, StoreError) as e:
        raise handle_chat_error(e) from e

    return ChatMessagesResponse(
        chat_id=chat_id,
        messages=[ChatMessageResponse.from_message(m) for m in messages],
    )


@router.post(
    "/{chat_id}/messages",
    response_model=MessageSentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send chat message",
)
async def send_message(
    chat_id: str,
    data: SendMessageRequest,
    chat_service: ChatServiceDep,
    user: CurrentUser,
) -> MessageSentResponse:
    """Post a message signed with the caller's role."""
    try:
        chat_service.ensure_participant(chat_id, user.uid)
        role = await chat_service.sender_role(user.uid)
        message_id = await chat_service.send_message(chat_id, role, data.text)
    except (ChatError, StoreError) as e:
        raise handle_chat_error(e) from e

    return MessageSentResponse(id=message_id)


@router.post(
    "/{chat_id}/read",
    response_model=MarkReadResponse,
    summary="Mark chat as read",
)
async def mark_read(
    chat_id: str,
    chat_service: ChatServiceDep,
    user: CurrentUser,
) -> MarkReadResponse:
    try:
        chat_service.ensure_participant(chat_id, user.uid)
        role = await chat_service.sender_role(user.uid)
        marked = await chat_service.mark_read(chat_id, role)
    except (ChatError, StoreError) as e:
        raise handle_chat_error(e) from e

    return MarkReadResponse(marked=marked)
