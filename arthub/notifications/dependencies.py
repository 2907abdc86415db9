"""FastAPI dependencies for status notifications."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from .watcher import InvitationStatusWatcher


async def get_status_watcher(request: Request) -> InvitationStatusWatcher:
    """Get the invitation status watcher from app state."""
    app_state = request.app.state
    if not hasattr(app_state, "status_watcher") or not app_state.status_watcher:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Status notifications not available",
        )
    return app_state.status_watcher


StatusWatcherDep = Annotated[InvitationStatusWatcher, Depends(get_status_watcher)]
