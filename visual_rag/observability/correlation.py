"""
Request context for log records.

Two context variables follow a request across awaits and worker threads
started with asyncio.to_thread: the correlation id taken from the
X-Correlation-ID header, and the analysis session id once the pipeline has
resolved it. RequestContextFilter copies both onto every log record.

Dependencies: contextvars, logging (stdlib)
System role: Request and session tracing for log output
"""

import logging
import uuid
from contextvars import ContextVar

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")
analysis_session_ctx: ContextVar[str] = ContextVar("analysis_session_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Bind the correlation id for the current request.

    Args:
        correlation_id: Incoming header value; a uuid4 hex is generated when empty

    Returns:
        str: The bound id
    """
    value = (correlation_id or "").strip()[:64] or uuid.uuid4().hex
    correlation_id_ctx.set(value)
    return value


def get_correlation_id() -> str:
    return correlation_id_ctx.get()


def bind_session_id(session_id: str) -> None:
    """Attach the analysis session id to subsequent log records of this request."""
    analysis_session_ctx.set(session_id)


def get_session_id() -> str:
    return analysis_session_ctx.get()


def clear_correlation_id() -> None:
    """Reset both ids at the end of a request."""
    correlation_id_ctx.set("")
    analysis_session_ctx.set("")


class RequestContextFilter(logging.Filter):
    """Stamp correlation_id and session_id on records ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = correlation_id_ctx.get() or "-"
        if not hasattr(record, "session_id"):
            record.session_id = analysis_session_ctx.get() or "-"
        return True
