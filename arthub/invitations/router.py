"""Invitation API endpoints.

Provides routes for:
- Artists applying to events and checking their application status
- Admins reviewing and deciding on applications
"""

import structlog
from fastapi import APIRouter, status

from arthub.auth.dependencies import AdminUser, CurrentUser
from arthub.notifications import WatchLimitError
from arthub.notifications.dependencies import StatusWatcherDep
from arthub.store import StoreError

from .dependencies import InvitationServiceDep, handle_invitation_error
from .schemas import (
    AppliedEventsResponse,
    InvitationListResponse,
    InvitationResponse,
    StatusChangeResponse,
    StatusCheckResponse,
    UpdateStatusRequest,
    WatchResponse,
)
from .service import InvitationError


logger = structlog.get_logger(__name__)


router = APIRouter(prefix="/v1/invitations", tags=["invitations"])


# ==============================================================================
# Artist Endpoints
# ==============================================================================


@router.get(
    "/applied",
    response_model=AppliedEventsResponse,
    summary="My applied events",
)
async def get_applied_events(
    invitation_service: InvitationServiceDep,
    user: CurrentUser,
) -> AppliedEventsResponse:
    """Ids of the events the caller applied to, whatever the status."""
    try:
        event_ids = await invitation_service.applied_event_ids(user.uid)
    except StoreError as e:
        raise handle_invitation_error(e) from e
    return AppliedEventsResponse(event_ids=sorted(event_ids))


@router.post(
    "/status-check",
    response_model=StatusCheckResponse,
    summary="Check my application statuses",
)
async def check_status(
    watcher: StatusWatcherDep,
    user: CurrentUser,
) -> StatusCheckResponse:
    """Compare stored statuses with the last ones seen and notify on changes.

    The first check of an application only records its status.
    """
    try:
        changes = await watcher.check_once(user.uid)
    except StoreError as e:
        raise handle_invitation_error(e) from e
    return StatusCheckResponse(
        changes=[StatusChangeResponse.from_event(c) for c in changes]
    )


@router.put(
    "/watch",
    response_model=WatchResponse,
    summary="Watch my application statuses",
)
async def start_watch(
    watcher: StatusWatcherDep,
    user: CurrentUser,
) -> WatchResponse:
    """Keep watching the caller's applications until stopped."""
    try:
        watcher.start(user.uid)
    except (WatchLimitError, StoreError) as e:
        raise handle_invitation_error(e) from e
    return WatchResponse(watching=True)


@router.delete(
    "/watch",
    response_model=WatchResponse,
    summary="Stop watching my application statuses",
)
async def stop_watch(
    watcher: StatusWatcherDep,
    user: CurrentUser,
) -> WatchResponse:
    watcher.stop(user.uid)
    return WatchResponse(watching=False)


@router.post(
    "/{event_id}/apply",
    response_model=InvitationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Apply to an event",
)
async def apply(
    event_id: str,
    invitation_service: InvitationServiceDep,
    user: CurrentUser,
) -> InvitationResponse:
    """Apply to exhibit at an event. The application starts as pending."""
    try:
        invitation = await invitation_service.apply(
            event_id, user.uid, user.email or ""
        )
    except (InvitationError, StoreError) as e:
        raise handle_invitation_error(e) from e
    return InvitationResponse.from_invitation(invitation)


# ==============================================================================
# Admin Endpoints
# ==============================================================================


@router.get(
    "",
    response_model=InvitationListResponse,
    summary="List applications (admin)",
)
async def list_invitations(
    invitation_service: InvitationServiceDep,
    _admin: AdminUser,
) -> InvitationListResponse:
    """All applications, newest first."""
    try:
        invitations = await invitation_service.list_invitations()
    except StoreError as e:
        raise handle_invitation_error(e) from e
    return InvitationListResponse(
        items=[InvitationResponse.from_invitation(i) for i in invitations],
        total=len(invitations),
    )


@router.patch(
    "/{event_id}/{artist_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Accept or reject an application (admin)",
)
async def update_status(
    event_id: str,
    artist_id: str,
    data: UpdateStatusRequest,
    invitation_service: InvitationServiceDep,
    admin: AdminUser,
) -> None:
    try:
        await invitation_service.update_status(event_id, artist_id, data.status)
    except (InvitationError, StoreError) as e:
        raise handle_invitation_error(e) from e

    logger.info(
        "invitation_decided",
        event_id=event_id,
        artist_id=artist_id,
        status=data.status.value,
        admin_id=admin.uid,
    )
