"""
RAG document ORM model.

A troubleshooting entry: text content plus the visual cues (icons,
indicator lights, display states) that let an image of a device be matched
to it, with an optional image embedding for similarity search.

Dependencies: sqlalchemy, pgvector, visual_rag.boundary.db.base
System role: Document store rows searched by the retriever
"""

from sqlalchemy import Boolean, Index, Integer, String, Text, JSON
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column
from pgvector.sqlalchemy import Vector

from visual_rag.boundary.db.base import Base, UUIDMixin, TimestampMixin
from visual_rag.configs import get_settings

EMBEDDING_DIMENSIONS = get_settings().gemini.embedding_dimensions


class RagDocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Troubleshooting document with visual metadata and image embedding.

    Attributes:
        title: Short entry title (<= 200 chars)
        content: Troubleshooting instructions (<= 10000 chars)
        icon_name: Name of the icon or indicator shown in the reference image
        icon_description: Visual description of the icon (<= 1000 chars)
        category: Primary issue category (open vocabulary, default general)
        subcategory: Optional finer category
        issue_type: Kind of issue (general, error, warning, ...)
        severity_level: low | medium | high | critical
        urgency_level: immediate | urgent | normal | low
        difficulty_level: beginner | intermediate | advanced | expert
        estimated_time_minutes: Expected fix time (1..480)
        tools_required, safety_warnings, visual_indicators, indicator_states, tags:
            Text arrays (tags are used by the overlap queries)
        image_embedding: Optional pgvector embedding of the reference image
        is_active: Soft-delete flag; inactive rows never reach retrieval
        source: Origin of the entry (manual, batch, import)
        document_metadata: Free-form JSON (stored in the "metadata" column)
    """

    __tablename__ = "rag_documents"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    icon_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    icon_description: Mapped[str | None] = mapped_column(Text, nullable=True)

    category: Mapped[str] = mapped_column(String(100), nullable=False, default="general")
    subcategory: Mapped[str | None] = mapped_column(String(100), nullable=True)
    issue_type: Mapped[str] = mapped_column(String(100), nullable=False, default="general")
    severity_level: Mapped[str] = mapped_column(String(20), nullable=False, default="medium")
    urgency_level: Mapped[str] = mapped_column(String(20), nullable=False, default="normal")
    difficulty_level: Mapped[str] = mapped_column(String(20), nullable=False, default="intermediate")
    estimated_time_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=15)

    tools_required: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)
    safety_warnings: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)
    visual_indicators: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)
    indicator_states: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)
    tags: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=list)

    image_embedding: Mapped[list[float] | None] = mapped_column(
        Vector(EMBEDDING_DIMENSIONS),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    source: Mapped[str] = mapped_column(String(50), nullable=False, default="manual")
    document_metadata: Mapped[dict] = mapped_column("metadata", JSON, nullable=False, default=dict)

    __table_args__ = (
        Index("idx_rag_documents_category", "category"),
        Index("idx_rag_documents_is_active", "is_active"),
        Index("idx_rag_documents_tags", "tags", postgresql_using="gin"),
    )
