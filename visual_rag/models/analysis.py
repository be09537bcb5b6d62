"""
Analysis request/response schemas.

Dependencies: pydantic
System role: Analyze API contract
"""

from typing import Any, Literal

from pydantic import Field

from visual_rag.core.context.schemas import ExtractedContext
from visual_rag.models.common import CamelModel, SuccessEnvelope


class AnalyzeRequest(CamelModel):
    """Request body for POST /analyze."""

    image_base64: str = Field(description="Base64 image (a data URL prefix is accepted)")
    mime_type: str = Field(default="image/jpeg", description="Image media type")
    user_text: str | None = Field(default=None, description="User question or hint")
    category: str | None = Field(default=None, description="Category restriction for vector search")
    analysis_type: str | None = Field(default=None, description="general, indicator, damage or diagnostic")
    system_prompt: str | None = Field(default=None, description="Overrides the catalog prompt")
    chat_history: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Prior turns, used when the session has no stored history",
    )
    session_id: str | None = Field(default=None, description="Session key; generated when absent")


class RetrievedDocumentOut(CamelModel):
    """Document summary returned with an analysis."""

    id: str
    title: str
    category: str
    severity_level: str
    relevance_score: float
    similarity: float | None = None
    icon_name: str | None = None
    icon_description: str | None = None
    tags: list[str] = Field(default_factory=list)


class AnalyzeResponse(SuccessEnvelope):
    """Response body for POST /analyze."""

    response: str
    response_status: Literal["ok", "blocked", "empty"]
    extracted_context: ExtractedContext
    context_source: Literal["model", "fallback"]
    retrieved_documents: list[RetrievedDocumentOut]
    match_count: int
    processing_time_ms: int
    session_id: str
