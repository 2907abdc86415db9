"""FastAPI dependencies for invitations."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from arthub.notifications import WatchLimitError
from arthub.store import StoreError

from .service import InvitationError, InvitationService


async def get_invitation_service(request: Request) -> InvitationService:
    """Get invitation service from app state."""
    app_state = request.app.state
    if not hasattr(app_state, "invitation_service") or not app_state.invitation_service:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Invitation service not available",
        )
    return app_state.invitation_service


InvitationServiceDep = Annotated[InvitationService, Depends(get_invitation_service)]


def handle_invitation_error(
    error: InvitationError | StoreError | WatchLimitError,
) -> HTTPException:
    """Convert invitation and store errors to HTTP exceptions."""
    status_map = {
        "invitation_not_found": status.HTTP_404_NOT_FOUND,
        "already_applied": status.HTTP_409_CONFLICT,
        "invalid_status": status.HTTP_400_BAD_REQUEST,
        "invalid_key": status.HTTP_400_BAD_REQUEST,
        "transient_store_error": status.HTTP_503_SERVICE_UNAVAILABLE,
        "conflict_on_increment": status.HTTP_503_SERVICE_UNAVAILABLE,
        "watch_limit_reached": status.HTTP_503_SERVICE_UNAVAILABLE,
    }

    status_code = status_map.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    return HTTPException(status_code=status_code, detail=error.message)
