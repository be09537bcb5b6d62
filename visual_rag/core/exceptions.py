"""
Exception hierarchy for the Visual RAG service.

Each class carries the HTTP status the API layer renders it with, and a
details dict that ends up in the error envelope and the log record.

    VisualRAGException (500)
    ├── ValidationError (400)
    ├── SessionNotFoundError (404)
    ├── DocumentNotFoundError (404)
    ├── ConfigurationError (500)
    ├── UpstreamServiceError (502)
    │   ├── SafetyBlockedError
    │   └── EmbeddingFailedError
    └── StoreError (503)

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


def _merge(details: dict[str, Any] | None, **context: Any) -> dict[str, Any]:
    """Copy details and add the context values that are not None."""
    merged = dict(details or {})
    merged.update({key: value for key, value in context.items() if value is not None})
    return merged


class VisualRAGException(Exception):
    """
    Base exception for all Visual RAG application errors.

    Attributes:
        message: User-facing message (the envelope's error field)
        details: Extra context for the envelope and the logs
    """

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.message} | Details: {self.details}" if self.details else self.message


class ValidationError(VisualRAGException):
    """Bad input: missing image, unsupported media type, field limits."""

    status_code = 400

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.field = field
        super().__init__(message, _merge(details, field=field))


class SessionNotFoundError(VisualRAGException):
    status_code = 404

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"Session not found: {session_id}", _merge(details, session_id=session_id))


class DocumentNotFoundError(VisualRAGException):
    status_code = 404

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"Document not found: {document_id}", _merge(details, document_id=document_id))


class ConfigurationError(VisualRAGException):
    """A credential such as GEMINI_API_KEY is missing."""

    status_code = 500

    def __init__(self, message: str, setting: str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, _merge(details, setting=setting))


class UpstreamServiceError(VisualRAGException):
    """
    Gemini or Google speech call failed.

    The message is already translated for end users; service names the
    failing API (gemini, gemini-embedding, TTS, STT).
    """

    status_code = 502

    def __init__(self, message: str, service: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.service = service
        super().__init__(message, _merge(details, service=service))


class SafetyBlockedError(UpstreamServiceError):
    """The model refused the request on safety grounds."""


class EmbeddingFailedError(UpstreamServiceError):
    """No usable embedding after all attempts (or a non-finite vector)."""

    def __init__(self, message: str, attempts: int | None = None, details: dict[str, Any] | None = None) -> None:
        self.attempts = attempts
        super().__init__(message, service="gemini-embedding", details=_merge(details, attempts=attempts))


class StoreError(VisualRAGException):
    """Postgres unavailable or a query failed."""

    status_code = 503

    def __init__(self, message: str, operation: str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, _merge(details, operation=operation))


def translate_upstream_message(raw: str) -> str:
    """
    Map a raw upstream error message to a user-facing explanation.

    Args:
        raw: Message text from the SDK or HTTP response

    Returns:
        str: Message safe to show in the error envelope
    """
    lowered = raw.lower()
    if "api_key" in lowered or "api key" in lowered:
        return "AI service API key is missing or invalid. Check the server configuration."
    if "quota" in lowered or "resource_exhausted" in lowered or "429" in lowered:
        return "AI service quota exceeded. Please try again later."
    if "safety" in lowered:
        return "The request was blocked by content safety filters."
    if "database" in lowered or "connection refused" in lowered:
        return "Database error. Please try again later."
    return f"AI service error: {raw}"
