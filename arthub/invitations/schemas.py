"""Pydantic schemas for invitations."""

from datetime import datetime

from pydantic import BaseModel, field_validator

from arthub.notifications.models import InvitationStatus, StatusChanged

from .models import DECISION_STATUSES, Invitation


# ==============================================================================
# Request Schemas
# ==============================================================================


class UpdateStatusRequest(BaseModel):
    """Admin decision on an application."""

    status: InvitationStatus

    @field_validator("status")
    @classmethod
    def validate_decision(cls, v: InvitationStatus) -> InvitationStatus:
        if v not in DECISION_STATUSES:
            msg = "Status must be accepted or rejected"
            raise ValueError(msg)
        return v


# ==============================================================================
# Response Schemas
# ==============================================================================


class InvitationResponse(BaseModel):
    """One application."""

    event_id: str
    event_title: str
    artist_id: str
    artist_name: str
    email: str
    status: InvitationStatus
    applied_at: datetime

    @classmethod
    def from_invitation(cls, invitation: Invitation) -> "InvitationResponse":
        return cls(
            event_id=invitation.event_id,
            event_title=invitation.event_title or invitation.event_id,
            artist_id=invitation.artist_id,
            artist_name=invitation.artist_name,
            email=invitation.email,
            status=invitation.status,
            applied_at=invitation.applied_at_datetime,
        )


class InvitationListResponse(BaseModel):
    """Applications, newest first."""

    items: list[InvitationResponse]
    total: int


class AppliedEventsResponse(BaseModel):
    """Events the caller has applied to."""

    event_ids: list[str]


class StatusChangeResponse(BaseModel):
    """A status transition detected for the caller."""

    event_id: str
    previous: InvitationStatus
    current: InvitationStatus

    @classmethod
    def from_event(cls, event: StatusChanged) -> "StatusChangeResponse":
        return cls(
            event_id=event.subject_id,
            previous=event.previous,
            current=event.current,
        )


class StatusCheckResponse(BaseModel):
    """Transitions found by a one-off status check."""

    changes: list[StatusChangeResponse]


class WatchResponse(BaseModel):
    """Whether the caller's invitations are being watched."""

    watching: bool
