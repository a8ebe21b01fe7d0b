"""
Invocation context management.
Use ContextVar to share the current request id and trace id with the log formatter.
"""

from contextvars import ContextVar
from typing import Optional

# Context variable for the invocation Request ID.
_request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
# Context variable for the X-Ray Trace ID (full header format).
_trace_id_var: ContextVar[Optional[str]] = ContextVar("trace_id", default=None)


def get_request_id() -> Optional[str]:
    """Get the current Request ID."""
    return _request_id_var.get()


def get_trace_id() -> Optional[str]:
    """Get the current Trace ID."""
    return _trace_id_var.get()


def bind_invocation(request_id: str, trace_id: Optional[str] = None) -> None:
    """
    Bind the invocation being processed to the current context.

    Args:
        request_id: lambda-runtime-aws-request-id of the invocation
        trace_id: lambda-runtime-trace-id of the invocation, if any
    """
    _request_id_var.set(request_id or None)
    _trace_id_var.set(trace_id or None)


def clear_invocation() -> None:
    """Clear the invocation context."""
    _request_id_var.set(None)
    _trace_id_var.set(None)
