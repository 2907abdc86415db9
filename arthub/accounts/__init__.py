"""User accounts and role resolution."""

from .models import Account, Role
from .service import (
    AccountError,
    AccountExistsError,
    AccountNotFoundError,
    AccountService,
    RoleNotAllowedError,
)


__all__ = [
    "Account",
    "AccountError",
    "AccountExistsError",
    "AccountNotFoundError",
    "AccountService",
    "Role",
    "RoleNotAllowedError",
]
