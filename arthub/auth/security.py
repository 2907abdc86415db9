"""Firebase ID token verification.

Tokens are issued by Firebase Auth on the client; this service only checks
them. The Admin SDK call is blocking (it may fetch signing keys), so it runs
in a worker thread.
"""

import asyncio
from typing import Any

import structlog

from .models import AuthenticatedUser


logger = structlog.get_logger(__name__)


class InvalidTokenError(Exception):
    """Token is missing, malformed, expired, or revoked."""

    def __init__(self, message: str = "Invalid or expired token"):
        self.message = message
        self.code = "invalid_token"
        super().__init__(message)


def user_from_claims(claims: dict[str, Any]) -> AuthenticatedUser:
    """Build the caller identity from decoded token claims."""
    uid = claims.get("uid") or claims.get("sub")
    if not isinstance(uid, str) or not uid:
        msg = "Token has no subject"
        raise InvalidTokenError(msg)
    email = claims.get("email")
    return AuthenticatedUser(uid=uid, email=email if isinstance(email, str) else None)


async def verify_id_token(token: str, check_revoked: bool = False) -> AuthenticatedUser:
    """Verify a Firebase ID token against the default app.

    Raises:
        InvalidTokenError: If the SDK rejects the token.
    """
    # Lazy import to avoid loading the SDK unless needed
    from firebase_admin import auth  # noqa: PLC0415

    try:
        claims = await asyncio.to_thread(
            auth.verify_id_token, token, check_revoked=check_revoked
        )
    except auth.RevokedIdTokenError as e:
        logger.info("id_token_revoked")
        msg = "Token has been revoked"
        raise InvalidTokenError(msg) from e
    except (ValueError, auth.InvalidIdTokenError) as e:
        logger.info("id_token_rejected", reason=type(e).__name__)
        raise InvalidTokenError from e

    return user_from_claims(claims)
