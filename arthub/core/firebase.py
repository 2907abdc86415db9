# ruff: noqa: PLW0603
"""Firebase Admin SDK bootstrap.

The Realtime Database and ID-token verification share one default app,
initialized lazily from the service account file in settings.
"""

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from arthub.config.settings import Settings


if TYPE_CHECKING:
    from firebase_admin import App


logger = structlog.get_logger(__name__)

_firebase_app: "App | None" = None


class FirebaseNotConfiguredError(Exception):
    """Raised when Firebase settings are missing or the SDK fails to start."""

    def __init__(self, message: str = "Firebase is not configured") -> None:
        self.message = message
        self.code = "firebase_not_configured"
        super().__init__(message)


def init_firebase(settings: Settings) -> "App":
    """Initialize the default Firebase app (idempotent).

    Raises:
        FirebaseNotConfiguredError: If settings are incomplete, the credentials
            file is missing, or the SDK refuses to initialize.
    """
    global _firebase_app

    if _firebase_app is not None:
        return _firebase_app

    if not settings.firebase_configured:
        raise FirebaseNotConfiguredError

    # Lazy import to avoid loading the SDK unless needed
    import firebase_admin  # noqa: PLC0415
    from firebase_admin import credentials  # noqa: PLC0415

    creds_path = Path(settings.firebase_credentials_path or "")
    if not creds_path.is_absolute():
        creds_path = Path.cwd() / creds_path
    if not creds_path.exists():
        raise FirebaseNotConfiguredError(
            f"Firebase credentials file not found: {creds_path}"
        )

    try:
        _firebase_app = firebase_admin.initialize_app(
            credentials.Certificate(str(creds_path)),
            {
                "databaseURL": settings.firebase_database_url,
                "projectId": settings.firebase_project_id,
            },
        )
    except (ValueError, OSError) as e:
        logger.exception("firebase_init_failed", error=str(e))
        raise FirebaseNotConfiguredError(f"Failed to initialize Firebase: {e}") from e

    logger.info(
        "firebase_initialized",
        project_id=settings.firebase_project_id,
        database_url=settings.firebase_database_url,
    )
    return _firebase_app


def shutdown_firebase() -> None:
    """Delete the default app so a later init starts clean."""
    global _firebase_app

    if _firebase_app is None:
        return

    import firebase_admin  # noqa: PLC0415

    firebase_admin.delete_app(_firebase_app)
    _firebase_app = None
    logger.info("firebase_shutdown")
