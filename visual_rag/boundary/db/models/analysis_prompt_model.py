"""
Analysis prompt ORM model.

System prompts selectable per analysis type (general, indicator, damage,
diagnostic).

Dependencies: sqlalchemy, visual_rag.boundary.db.base
System role: Prompt catalog for the response synthesizer
"""

from sqlalchemy import Boolean, Integer, String, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column

from visual_rag.boundary.db.base import Base, UUIDMixin, TimestampMixin


class AnalysisPromptModel(Base, UUIDMixin, TimestampMixin):
    """
    Selectable analysis prompt.

    Attributes:
        name: Display name
        prompt_text: System prompt sent ahead of the grounding prompt
        description: Short explanation shown in the UI
        prompt_type: Prompt family (analysis)
        analysis_focus: Analysis type key (general, indicator, damage, diagnostic)
        category: Issue category the prompt is tuned for
        is_active: Hidden from listings when False
        priority: Higher first in listings
        prompt_metadata: Free-form JSON (stored in the "metadata" column)
    """

    __tablename__ = "analysis_prompts"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    prompt_text: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    prompt_type: Mapped[str] = mapped_column(String(50), nullable=False, default="analysis")
    analysis_focus: Mapped[str] = mapped_column(String(50), nullable=False, default="general")
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="general")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    prompt_metadata: Mapped[dict] = mapped_column("metadata", JSON, nullable=False, default=dict)
