"""
Extracted context schema.

What the multimodal model reports about an image: category, issues,
visible indicators, urgency and search keywords. Values from the model are
coerced leniently; anything unusable falls back to the permissive defaults.

Dependencies: pydantic
System role: Shared context type for retrieval, synthesis and sessions
"""

from typing import Any, Literal

from pydantic import Field, field_validator

from visual_rag.models.common import CamelModel

UrgencyLevel = Literal["low", "medium", "high", "critical"]
URGENCY_LEVELS: tuple[str, ...] = ("low", "medium", "high", "critical")


def _string_list(value: Any) -> list[str]:
    """Coerce a model value to a deduplicated list of non-empty strings."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    seen: list[str] = []
    for item in value:
        if item is None:
            continue
        text = str(item).strip()
        if text and text not in seen:
            seen.append(text)
    return seen


class ExtractedContext(CamelModel):
    """Structured description of a device image."""

    primary_category: str = Field(default="general", description="Open-vocabulary category")
    secondary_categories: list[str] = Field(default_factory=list)
    detected_issues: list[str] = Field(default_factory=list)
    visual_indicators: list[str] = Field(default_factory=list)
    urgency_level: UrgencyLevel = Field(default="medium")
    keywords: list[str] = Field(default_factory=list)
    device_type: str = Field(default="unknown")
    problem_type: str = Field(default="unknown")

    @field_validator("primary_category", mode="before")
    @classmethod
    def _category(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            return "general"
        return value.strip().lower()

    @field_validator("device_type", "problem_type", mode="before")
    @classmethod
    def _open_text(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            return "unknown"
        return value.strip()

    @field_validator("urgency_level", mode="before")
    @classmethod
    def _urgency(cls, value: Any) -> str:
        if isinstance(value, str) and value.strip().lower() in URGENCY_LEVELS:
            return value.strip().lower()
        return "medium"

    @field_validator("secondary_categories", mode="before")
    @classmethod
    def _categories(cls, value: Any) -> list[str]:
        return [item.lower() for item in _string_list(value)]

    @field_validator("detected_issues", "visual_indicators", "keywords", mode="before")
    @classmethod
    def _lists(cls, value: Any) -> list[str]:
        return _string_list(value)

    def search_keywords(self) -> list[str]:
        """
        Keywords used by the text strategies.

        keywords + detected issues + visual indicators + device/problem type,
        lowercased and deduplicated in that order, without "unknown".
        """
        candidates = [
            *self.keywords,
            *self.detected_issues,
            *self.visual_indicators,
            self.device_type,
            self.problem_type,
        ]
        result: list[str] = []
        for candidate in candidates:
            lowered = candidate.strip().lower()
            if lowered and lowered != "unknown" and lowered not in result:
                result.append(lowered)
        return result
