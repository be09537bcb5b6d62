"""
Context extraction: turns an image and an optional hint into an
ExtractedContext that drives retrieval and synthesis.
"""

from visual_rag.core.context.schemas import ExtractedContext
from visual_rag.core.context.structured_output import (
    Fallback,
    Parsed,
    fallback_context,
    parse_extracted_context,
)
from visual_rag.core.context.extractor import ContextExtractor

__all__ = [
    "ExtractedContext",
    "Fallback",
    "Parsed",
    "parse_extracted_context",
    "ContextExtractor",
    "fallback_context",
]
