"""FastAPI dependencies for comment threads."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from arthub.store import StoreError

from .service import CommentError, CommentService


async def get_comment_service(request: Request) -> CommentService:
    """Get comment service from app state."""
    app_state = request.app.state
    if not hasattr(app_state, "comment_service") or not app_state.comment_service:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Comment service not available",
        )
    return app_state.comment_service


CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]


def handle_comment_error(error: CommentError | StoreError) -> HTTPException:
    """Convert comment and store errors to HTTP exceptions."""
    status_map = {
        "comment_not_found": status.HTTP_404_NOT_FOUND,
        "empty_comment": status.HTTP_400_BAD_REQUEST,
        "invalid_key": status.HTTP_400_BAD_REQUEST,
        "transient_store_error": status.HTTP_503_SERVICE_UNAVAILABLE,
        "conflict_on_increment": status.HTTP_503_SERVICE_UNAVAILABLE,
    }

    status_code = status_map.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return HTTPException(
        status_code=status_code,
        detail=error.message,
    )
