"""API-specific dependencies."""

from .dependencies import (
    get_analysis_service,
    get_catalog_service,
    get_chat_service,
    get_document_service,
    get_service_cache,
    get_session_service,
    get_settings_dependency,
    get_speech_service,
)

__all__ = [
    "get_analysis_service",
    "get_catalog_service",
    "get_chat_service",
    "get_document_service",
    "get_service_cache",
    "get_session_service",
    "get_settings_dependency",
    "get_speech_service",
]
