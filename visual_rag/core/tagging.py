"""
Document tagging.

Two sources of search metadata for registered documents: a Gemini call
that extracts visual indicators, indicator states and tags (degrading to
empty lists), and rule-based suggested tags used when the model yields no
tags.

Dependencies: visual_rag.boundary.genai, visual_rag.core.context.structured_output
System role: Metadata enrichment for document registration
"""

import logging
import re
from dataclasses import dataclass, field

from visual_rag.boundary.genai.gemini_gateway import GeminiGateway
from visual_rag.core.context.structured_output import extract_json_object
from visual_rag.core.exceptions import VisualRAGException

logger = logging.getLogger(__name__)

MAX_SUGGESTED_TAGS = 10

# (pattern, tag) in priority order: indicator types, colours, states
_TAG_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(pattern), tag)
    for pattern, tag in [
        (r"\b(led|light)", "led"),
        (r"\b(display|screen)", "display"),
        (r"\b(warning|alert)", "warning"),
        (r"\b(error|fault)", "error"),
        (r"\b(status|indicator)", "status"),
        (r"\b(maintenance|service)", "maintenance"),
        (r"\b(safety|danger)", "safety"),
        (r"\b(power|electrical)", "electrical"),
        (r"\b(mechanical|motor)", "mechanical"),
        (r"\b(sensor|detection)", "sensor"),
        (r"\bred\b", "red"),
        (r"\bgreen\b", "green"),
        (r"\bblue\b", "blue"),
        (r"\b(yellow|amber)\b", "yellow"),
        (r"\borange\b", "orange"),
        (r"\b(blinking|flashing)\b", "blinking"),
        (r"\b(solid|steady)\b", "solid"),
        (r"\b(off|disabled)\b", "off"),
        (r"\b(on|enabled)\b", "on"),
    ]
]

INDICATOR_EXTRACTION_PROMPT = """Analyze this troubleshooting information and extract structured data:

Icon Name: {icon_name}
Icon Description: {icon_description}
Troubleshooting Content: {content}

Extract and return ONLY a JSON object with these fields:
{{
  "visualIndicators": ["visual indicator types such as 'led_light', 'display_message', 'warning_symbol'"],
  "indicatorStates": ["states such as 'blinking', 'solid', 'off', 'red', 'green'"],
  "tags": ["relevant tags for categorization and search"]
}}

Focus on identifying:
- Types of visual indicators (lights, displays, symbols, gauges)
- States or conditions of these indicators
- Relevant keywords for categorization

Return only valid JSON, no additional text."""


def suggest_tags(*texts: str | None) -> list[str]:
    """
    Rule-based tags for a document.

    Args:
        *texts: Icon name, icon description, content (None allowed)

    Returns:
        list[str]: Up to 10 tags in pattern order
    """
    text = " ".join(t for t in texts if t).lower()
    tags: list[str] = []
    for pattern, tag in _TAG_PATTERNS:
        if tag not in tags and pattern.search(text):
            tags.append(tag)
    return tags[:MAX_SUGGESTED_TAGS]


def _clean(values: object) -> list[str]:
    if not isinstance(values, list):
        return []
    cleaned: list[str] = []
    for value in values:
        text = str(value).strip() if value is not None else ""
        if text and text not in cleaned:
            cleaned.append(text)
    return cleaned


@dataclass
class IndicatorMetadata:
    visual_indicators: list[str] = field(default_factory=list)
    indicator_states: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


class IndicatorExtractor:
    """Gemini-assisted extraction of indicator metadata from document text."""

    def __init__(self, gateway: GeminiGateway) -> None:
        self.gateway = gateway

    async def extract(
        self,
        icon_name: str | None,
        icon_description: str | None,
        content: str,
    ) -> IndicatorMetadata:
        """Extract metadata; any failure yields empty lists."""
        if not self.gateway.is_configured:
            return IndicatorMetadata()

        prompt = INDICATOR_EXTRACTION_PROMPT.format(
            icon_name=icon_name or "",
            icon_description=icon_description or "",
            content=content,
        )
        try:
            response = await self.gateway.generate(
                prompt,
                temperature=0.1,
                max_output_tokens=500,
                json_output=True,
            )
            payload = extract_json_object(response.text or "")
        except (VisualRAGException, ValueError) as e:
            logger.warning(f"{__name__}:extract - Indicator extraction failed - {type(e).__name__}: {e}")
            return IndicatorMetadata()

        if payload is None:
            logger.warning(f"{__name__}:extract - Indicator extraction returned no JSON")
            return IndicatorMetadata()

        return IndicatorMetadata(
            visual_indicators=_clean(payload.get("visualIndicators")),
            indicator_states=_clean(payload.get("indicatorStates")),
            tags=_clean(payload.get("tags")),
        )
