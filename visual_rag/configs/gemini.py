"""
Gemini configuration settings.

Model identifiers, embedding width and retry policy, and generation
parameters for the context extraction and response synthesis calls.

Dependencies: pydantic, pydantic_settings
System role: Generative AI service configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeminiSettings(BaseSettings):
    """Google Gemini configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GEMINI_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="Gemini API key (GEMINI_API_KEY)")
    generation_model: str = Field(
        default="gemini-2.5-flash",
        description="Model used for context extraction and response synthesis",
    )
    embedding_model: str = Field(
        default="gemini-embedding-001",
        description="Model used for image embeddings",
    )

    embedding_dimensions: int = Field(
        default=1408,
        description="Target embedding width (must match the pgvector column)",
    )
    embedding_max_attempts: int = Field(
        default=3,
        ge=1,
        description="Total embedding attempts before EmbeddingFailedError",
    )
    embedding_backoff_base: float = Field(
        default=1.0,
        description="First backoff delay in seconds, doubled on every retry",
    )
    embedding_backoff_max: float = Field(
        default=8.0,
        description="Upper bound for a single backoff delay in seconds",
    )

    extraction_temperature: float = Field(default=0.2, description="Temperature for context extraction")
    extraction_max_output_tokens: int = Field(default=1024, description="Token cap for context extraction")

    temperature: float = Field(default=0.7, description="Temperature for response synthesis")
    top_k: int = Field(default=40, description="Top-k sampling for response synthesis")
    top_p: float = Field(default=0.95, description="Top-p sampling for response synthesis")
    max_output_tokens: int = Field(default=1500, description="Token cap for response synthesis")
