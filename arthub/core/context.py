"""Request context tracking using contextvars.

Each request gets an ID plus optional user/trace information, readable from
anywhere in the call stack (including the structlog processors) without
passing it around explicitly.
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4


request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_id_var: ContextVar[str | None] = ContextVar("user_id", default=None)
trace_id_var: ContextVar[str | None] = ContextVar("trace_id", default=None)
correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def generate_request_id() -> str:
    """Generate a new unique request ID."""
    return str(uuid4())


def get_request_id() -> str:
    """Get the current request ID."""
    return request_id_var.get()


def set_request_id(request_id: str | None = None) -> str:
    """Set the request ID, generating one when not provided."""
    rid = request_id or generate_request_id()
    request_id_var.set(rid)
    return rid


def get_user_id() -> str | None:
    """Get the current user ID (Firebase uid)."""
    return user_id_var.get()


def set_user_id(user_id: str | None) -> None:
    """Set the user ID for the current context."""
    user_id_var.set(user_id)


def get_trace_id() -> str | None:
    return trace_id_var.get()


def set_trace_id(trace_id: str | None) -> None:
    trace_id_var.set(trace_id)


def get_correlation_id() -> str | None:
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str | None) -> None:
    correlation_id_var.set(correlation_id)


def get_context() -> dict[str, Any]:
    """Get all non-empty context variables as a dictionary."""
    values = {
        "request_id": get_request_id(),
        "user_id": get_user_id(),
        "trace_id": get_trace_id(),
        "correlation_id": get_correlation_id(),
    }
    return {key: value for key, value in values.items() if value}


def clear_context() -> None:
    """Reset all context variables at the end of a request."""
    request_id_var.set("")
    user_id_var.set(None)
    trace_id_var.set(None)
    correlation_id_var.set(None)
