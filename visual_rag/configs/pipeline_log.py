"""
Pipeline log configuration settings.

Sizing of the in-memory event and error buffers and whether events are also
written to the analysis_logs table.

Dependencies: pydantic_settings
System role: Observability configuration for the analysis pipeline
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineLogSettings(BaseSettings):
    """Pipeline event logging configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PIPELINE_LOG_",
        case_sensitive=False,
        extra="ignore",
    )

    buffer_size: int = Field(default=1000, ge=1, description="Events kept in memory")
    error_buffer_size: int = Field(default=1000, ge=1, description="Errors kept in memory")
    persist_events: bool = Field(default=True, description="Write events to analysis_logs")
