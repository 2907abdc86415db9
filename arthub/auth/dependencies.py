"""FastAPI dependencies for authentication.

Provides dependency injection for:
- Current user extraction from a Firebase ID token
- Admin role guard backed by account role resolution
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from arthub.accounts.dependencies import AccountServiceDep, handle_account_error
from arthub.accounts.models import Role
from arthub.core.context import set_user_id
from arthub.store import StoreError

from .models import AuthenticatedUser
from .security import InvalidTokenError, verify_id_token


def get_token_from_header(request: Request) -> str | None:
    """Extract Bearer token from Authorization header."""
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    expected_parts = 2
    parts = auth_header.split()
    if len(parts) != expected_parts or parts[0].lower() != "bearer":
        return None

    return parts[1]


async def get_current_user(
    token: Annotated[str | None, Depends(get_token_from_header)],
) -> AuthenticatedUser:
    """Get current authenticated user from the Firebase ID token.

    Raises:
        HTTPException(401): If token is missing or fails verification
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token not provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user = await verify_id_token(token)
    except InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    # Set user_id in context for logging
    set_user_id(user.uid)
    return user


async def require_admin(
    user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    account_service: AccountServiceDep,
) -> AuthenticatedUser:
    """Allow only callers whose resolved role is admin."""
    try:
        role = await account_service.resolve_role(user.uid)
    except StoreError as e:
        raise handle_account_error(e) from e
    if role != Role.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )
    return user


# ==============================================================================
# Type Aliases for Cleaner Code
# ==============================================================================

CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
AdminUser = Annotated[AuthenticatedUser, Depends(require_admin)]
