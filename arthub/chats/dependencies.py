"""FastAPI dependencies for chats."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from arthub.store import StoreError

from .service import ChatError, ChatService


async def get_chat_service(request: Request) -> ChatService:
    """Get chat service from app state."""
    app_state = request.app.state
    if not hasattr(app_state, "chat_service") or not app_state.chat_service:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Chat service not available",
        )
    return app_state.chat_service


ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]


def handle_chat_error(error: ChatError | StoreError) -> HTTPException:
    """Convert chat and store errors to HTTP exceptions."""
    status_map = {
        "chat_access_denied": status.HTTP_403_FORBIDDEN,
        "empty_message": status.HTTP_400_BAD_REQUEST,
        "sender_role_unknown": status.HTTP_403_FORBIDDEN,
        "invalid_key": status.HTTP_400_BAD_REQUEST,
        "transient_store_error": status.HTTP_503_SERVICE_UNAVAILABLE,
    }

    status_code = status_map.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return HTTPException(status_code=status_code, detail=error.message)
