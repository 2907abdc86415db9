# Core infrastructure
from arthub.core.context import (
    clear_context,
    get_context,
    get_request_id,
    get_user_id,
    set_request_id,
    set_user_id,
)
from arthub.core.firebase import init_firebase, shutdown_firebase
from arthub.core.logging import configure_structlog, get_logger
from arthub.core.middleware import RequestContextMiddleware


__all__ = [
    "RequestContextMiddleware",
    "clear_context",
    "configure_structlog",
    "get_context",
    "get_logger",
    "get_request_id",
    "get_user_id",
    "init_firebase",
    "set_request_id",
    "set_user_id",
    "shutdown_firebase",
]
