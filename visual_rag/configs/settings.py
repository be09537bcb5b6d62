"""
Application settings.

Settings nests one object per concern; each reads its own env prefix
(POSTGRES_, GEMINI_, RETRIEVAL_, GOOGLE_TTS_, PIPELINE_LOG_) while the
top level carries the unprefixed service fields from BaseSettings.

Dependencies: pydantic_settings, visual_rag.configs
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from visual_rag.configs.base import BaseSettings
from visual_rag.configs.database import DatabaseSettings
from visual_rag.configs.gemini import GeminiSettings
from visual_rag.configs.pipeline_log import PipelineLogSettings
from visual_rag.configs.retrieval import RetrievalSettings
from visual_rag.configs.speech import SpeechSettings


class Settings(BaseSettings):
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    speech: SpeechSettings = Field(default_factory=SpeechSettings)
    pipeline_log: PipelineLogSettings = Field(default_factory=PipelineLogSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Process-wide settings, read from the environment on first call.

    Usage:
        from visual_rag.configs import get_settings
        top_k = get_settings().retrieval.top_k
    """
    return Settings()
