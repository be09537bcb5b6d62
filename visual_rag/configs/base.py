"""
Shared configuration fields.

Every settings class reads the process environment and an optional .env
file. The unprefixed fields here (ENVIRONMENT, LOG_LEVEL, CORS_ORIGINS,
HOST, PORT) describe the service itself.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings
from pydantic_settings import SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development", description="development, staging or production")
    log_level: str = Field(default="INFO", description="Root log level")
    cors_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the API from a browser (JSON list in the environment)",
    )
    host: str = Field(default="localhost", description="Bind address for `python -m visual_rag.main`")
    port: int = Field(default=8082, description="Bind port for `python -m visual_rag.main`")
