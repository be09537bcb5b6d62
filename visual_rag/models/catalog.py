"""
Catalog schemas: categories, analysis prompts and statistics.

Dependencies: pydantic
System role: Catalog API contracts
"""

from typing import Any

from pydantic import Field

from visual_rag.models.common import CamelModel, SuccessEnvelope


class CategoryOut(CamelModel):
    name: str
    display_name: str
    description: str | None = None
    icon: str | None = None
    color: str | None = None
    count: int = 0
    parent_category: str | None = None
    is_defined: bool = True
    sort_order: int = 0
    metadata: dict[str, Any] = Field(default_factory=dict)


class CategoryListResponse(SuccessEnvelope):
    categories: list[CategoryOut]


class PromptOut(CamelModel):
    id: str
    name: str
    prompt_text: str
    description: str | None = None
    prompt_type: str
    analysis_focus: str
    category: str
    priority: int


class PromptListResponse(SuccessEnvelope):
    prompts: list[PromptOut]


class DocumentStats(CamelModel):
    total: int
    by_category: dict[str, int] = Field(default_factory=dict)
    by_issue_type: dict[str, int] = Field(default_factory=dict)
    by_severity: dict[str, int] = Field(default_factory=dict)
    by_difficulty: dict[str, int] = Field(default_factory=dict)


class StatsResponse(SuccessEnvelope):
    documents: DocumentStats
    interactions_last_30_days: dict[str, int] = Field(default_factory=dict)
    errors: dict[str, Any] = Field(default_factory=dict)
    recent_events: int = 0
