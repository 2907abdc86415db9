"""Artist applications to exhibit at events."""

from .models import Invitation
from .service import (
    AlreadyAppliedError,
    InvalidStatusError,
    InvitationError,
    InvitationNotFoundError,
    InvitationService,
)


__all__ = [
    "AlreadyAppliedError",
    "InvalidStatusError",
    "Invitation",
    "InvitationError",
    "InvitationNotFoundError",
    "InvitationService",
]
