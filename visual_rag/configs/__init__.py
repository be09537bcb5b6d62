"""
Configuration management module.

Typed settings per concern (database, Gemini, retrieval, speech, pipeline
log) read from environment variables and .env via pydantic-settings.
"""

from visual_rag.configs.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
