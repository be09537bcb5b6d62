"""
Retrieval configuration settings.

Similarity thresholds, result counts and scoring weights for the document
retriever. The original routes each hard-coded different values; here they
are configuration.

Dependencies: pydantic, pydantic_settings
System role: Document retrieval tuning
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrievalSettings(BaseSettings):
    """Document retrieval configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    top_k: int = Field(default=5, ge=1, le=20, description="Maximum documents returned")
    similarity_threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Minimum cosine similarity for the vector strategy",
    )
    vector_match_count: int = Field(default=5, ge=1, description="Rows requested from the similarity search")
    candidate_limit: int = Field(default=20, ge=1, description="Rows fetched per keyword/category query")
    text_search_keyword_limit: int = Field(
        default=5,
        ge=1,
        description="Keywords used in the title/content text search",
    )
    urgent_fetch_count: int = Field(default=3, ge=1, description="Safety documents fetched for urgent contexts")

    vector_weight: float = Field(default=0.6, description="Weight applied to vector similarity")
    keyword_increment: float = Field(default=0.1, description="Bonus per matched keyword")
    primary_category_bonus: float = Field(default=0.3, description="Bonus for an exact primary category match")
    secondary_category_bonus: float = Field(default=0.15, description="Bonus for a secondary category match")
    urgency_bonus: float = Field(default=0.2, description="Bonus for safety documents on urgent contexts")
