"""
Structured logging helpers.

Values passed as log context are summarised before they reach a handler:
request bodies here carry base64 images and embedding vectors that would
otherwise flood the output.

Dependencies: logging (stdlib), visual_rag.core.exceptions
System role: Logging helper functions
"""

import logging
from typing import Any

from visual_rag.core.exceptions import VisualRAGException

# LogRecord attributes; an extra key with one of these names raises KeyError
_RESERVED_KEYS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

# Strings longer than this that look like base64 are logged by size only
_BASE64_SUMMARY_THRESHOLD = 256


def _looks_like_base64(text: str) -> bool:
    head = text[:_BASE64_SUMMARY_THRESHOLD]
    return head.startswith("data:") or (" " not in head and "\n" not in head)


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Render a value for a log record without dumping payloads.

    Args:
        value: Any context value
        max_length: Cut-off for plain strings

    Returns:
        str: Short representation (bytes, images and vectors by size)
    """
    if value is None:
        return "None"
    if isinstance(value, (bytes, bytearray)):
        return f"bytes({len(value)})"
    if isinstance(value, str):
        if len(value) > _BASE64_SUMMARY_THRESHOLD and _looks_like_base64(value):
            return f"base64({len(value)} chars)"
        text = value
    elif isinstance(value, (list, tuple)):
        if value and all(isinstance(item, float) for item in value):
            return f"vector({len(value)})"
        return f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        return f"dict({len(value)} keys)"
    else:
        try:
            text = str(value)
        except Exception as e:
            return f"<unprintable {type(value).__name__}: {type(e).__name__}>"

    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def _as_extra(context: dict[str, Any]) -> dict[str, str]:
    return {
        (f"ctx_{key}" if key in _RESERVED_KEYS else key): safe_log_value(value)
        for key, value in context.items()
    }


def log_with_context(logger: logging.Logger, level: int, message: str, **context) -> None:
    """Log message with summarised keyword context attached as record attributes."""
    logger.log(level, message, extra=_as_extra(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log an exception with traceback and context.

    VisualRAGException details are merged into the context so the status
    and the failing field or service appear on the record.

    Args:
        logger: Target logger
        message: Log message
        exc: The exception being reported
        **context: Extra key/value context
    """
    if isinstance(exc, VisualRAGException):
        context = {**exc.details, "status_code": exc.status_code, **context}
    extra = _as_extra(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(getattr(exc, "message", None) or str(exc))
    logger.error(message, exc_info=exc, extra=extra)
