"""
Retrieval domain schemas.

RagDocument is the store-independent view of a rag_documents row;
RetrievalResult pairs it with its scores for one request.

Dependencies: pydantic
System role: Types shared by the retriever, synthesizer and API
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import Field

from visual_rag.models.common import CamelModel

SeverityLevel = Literal["low", "medium", "high", "critical"]
UrgencyLevel = Literal["immediate", "urgent", "normal", "low"]
DifficultyLevel = Literal["beginner", "intermediate", "advanced", "expert"]


class RagDocument(CamelModel):
    """A troubleshooting document as seen by retrieval and the API."""

    id: str
    title: str
    content: str
    icon_name: str | None = None
    icon_description: str | None = None
    category: str = "general"
    subcategory: str | None = None
    issue_type: str = "general"
    severity_level: SeverityLevel = "medium"
    urgency_level: UrgencyLevel = "normal"
    difficulty_level: DifficultyLevel = "intermediate"
    estimated_time_minutes: int = 15
    tools_required: list[str] = Field(default_factory=list)
    safety_warnings: list[str] = Field(default_factory=list)
    visual_indicators: list[str] = Field(default_factory=list)
    indicator_states: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    is_active: bool = True
    source: str = "manual"
    metadata: dict[str, Any] = Field(default_factory=dict)
    has_embedding: bool = False
    created_at: datetime | None = None

    def searchable_text(self) -> str:
        """Lowercased title, content and tags used for keyword matching."""
        return " ".join([self.title, self.content, " ".join(self.tags)]).lower()


class RetrievalResult(CamelModel):
    """
    A retrieved document with its scores.

    similarity is the raw cosine similarity when the vector strategy matched
    the document, None otherwise; relevance_score is the merged total.
    """

    document: RagDocument
    similarity: float | None = None
    relevance_score: float
