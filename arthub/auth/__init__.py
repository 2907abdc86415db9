"""Firebase token authentication."""

from .dependencies import AdminUser, CurrentUser, get_current_user, require_admin
from .models import AuthenticatedUser
from .security import InvalidTokenError, verify_id_token


__all__ = [
    "AdminUser",
    "AuthenticatedUser",
    "CurrentUser",
    "InvalidTokenError",
    "get_current_user",
    "require_admin",
    "verify_id_token",
]
