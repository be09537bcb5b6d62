"""
Structured-output parser for model responses.

Models asked for "JSON only" still wrap the object in prose or code fences.
The parser takes the first balanced {...} object (brace matching that
ignores braces inside string literals), falls back to the widest {...}
span, and validates the result into an ExtractedContext. The outcome is
explicit: Parsed(context) or Fallback(reason, context), never an exception.

Dependencies: pydantic, json (stdlib)
System role: Pure parsing step of context extraction
"""

import json
import re
from dataclasses import dataclass
from typing import Any

import pydantic

from visual_rag.core.context.schemas import ExtractedContext

_GREEDY_OBJECT = re.compile(r"\{[\s\S]*\}")


@dataclass(frozen=True)
class Parsed:
    context: ExtractedContext


@dataclass(frozen=True)
class Fallback:
    reason: str
    context: ExtractedContext


def fallback_context(hint: str | None = None) -> ExtractedContext:
    """
    Default context used when extraction fails.

    Category general, urgency medium, keywords = whitespace tokens of the
    hint longer than 2 characters. Same hint, same context.
    """
    keywords = [token for token in (hint or "").split() if len(token) > 2]
    return ExtractedContext(keywords=keywords)


def find_balanced_object(text: str) -> str | None:
    """
    Return the first balanced JSON object substring, or None.

    Braces inside double-quoted strings (including escaped quotes) are not
    counted.
    """
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for index in range(start, len(text)):
            char = text[index]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue
            if char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start:index + 1]
        # Unbalanced from this brace; try the next opening brace
        start = text.find("{", start + 1)
    return None


def _load_object(candidate: str | None) -> dict[str, Any] | None:
    if candidate is None:
        return None
    try:
        loaded = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return loaded if isinstance(loaded, dict) else None


def extract_json_object(text: str) -> dict[str, Any] | None:
    """Balanced-object extraction first, greedy {...} match second."""
    loaded = _load_object(find_balanced_object(text))
    if loaded is not None:
        return loaded
    match = _GREEDY_OBJECT.search(text)
    return _load_object(match.group(0) if match else None)


def parse_extracted_context(text: str | None, hint: str | None = None) -> Parsed | Fallback:
    """
    Parse model output into an ExtractedContext.

    Args:
        text: Raw model response text
        hint: User hint, used for fallback keywords

    Returns:
        Parsed when a JSON object validated, Fallback with a reason otherwise
    """
    if not text or not text.strip():
        return Fallback("empty response", fallback_context(hint))

    payload = extract_json_object(text)
    if payload is None:
        return Fallback("no JSON object in response", fallback_context(hint))

    try:
        return Parsed(ExtractedContext.model_validate(payload))
    except pydantic.ValidationError as e:
        return Fallback(f"invalid context fields: {e.error_count()} errors", fallback_context(hint))
