"""
Document registration schemas.

Length and range limits are enforced by the document service so that every
violation produces the same error envelope; the schemas only fix types and
enumerations.

Dependencies: pydantic
System role: Document API contracts
"""

from typing import Any

from pydantic import Field

from visual_rag.core.retrieval.schemas import (
    DifficultyLevel,
    RagDocument,
    SeverityLevel,
    UrgencyLevel,
)
from visual_rag.models.common import CamelModel, SuccessEnvelope

MAX_BATCH_ENTRIES = 50


class DocumentCreateRequest(CamelModel):
    """Request body for POST /documents and each batch entry."""

    title: str = ""
    content: str = ""
    icon_name: str | None = None
    icon_description: str | None = None
    category: str = "general"
    subcategory: str | None = None
    issue_type: str = "visual_indicator"
    severity_level: SeverityLevel = "medium"
    urgency_level: UrgencyLevel = "normal"
    difficulty_level: DifficultyLevel = "intermediate"
    estimated_time_minutes: int = 15
    tools_required: list[str] = Field(default_factory=list)
    safety_warnings: list[str] = Field(default_factory=list)
    visual_indicators: list[str] = Field(default_factory=list)
    indicator_states: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    image_base64: str | None = Field(default=None, description="Reference image (embedded when given)")
    mime_type: str | None = None
    source: str = "manual"
    metadata: dict[str, Any] = Field(default_factory=dict)
    auto_extract: bool = Field(default=True, description="Run AI indicator extraction")


class DocumentUpdateRequest(CamelModel):
    """Request body for PATCH /documents/{id}; omitted fields are unchanged."""

    title: str | None = None
    content: str | None = None
    icon_name: str | None = None
    icon_description: str | None = None
    category: str | None = None
    subcategory: str | None = None
    issue_type: str | None = None
    severity_level: SeverityLevel | None = None
    urgency_level: UrgencyLevel | None = None
    difficulty_level: DifficultyLevel | None = None
    estimated_time_minutes: int | None = None
    tools_required: list[str] | None = None
    safety_warnings: list[str] | None = None
    visual_indicators: list[str] | None = None
    indicator_states: list[str] | None = None
    tags: list[str] | None = None
    image_base64: str | None = None
    mime_type: str | None = None
    is_active: bool | None = None
    metadata: dict[str, Any] | None = None


class DocumentResponse(SuccessEnvelope):
    document: RagDocument
    warnings: list[str] = Field(default_factory=list)
    suggested_tags: list[str] = Field(default_factory=list)


class BatchRegisterRequest(CamelModel):
    entries: list[DocumentCreateRequest]


class BatchEntryResult(CamelModel):
    index: int
    success: bool
    document_id: str | None = None
    title: str | None = None
    error: str | None = None
    warnings: list[str] = Field(default_factory=list)


class BatchRegisterResponse(SuccessEnvelope):
    results: list[BatchEntryResult]
    registered: int
    failed: int


class DocumentListResponse(SuccessEnvelope):
    documents: list[RagDocument]
    count: int
    limit: int
    offset: int


class DocumentDeleteResponse(SuccessEnvelope):
    document_id: str
    hard: bool
