"""
Response synthesis: grounding prompt plus Gemini chat.
"""

from visual_rag.core.synthesis.prompt_builder import build_grounding_prompt
from visual_rag.core.synthesis.synthesizer import (
    BLOCKED_MESSAGE,
    EMPTY_MESSAGE,
    ResponseSynthesizer,
    SynthesisResult,
)

__all__ = [
    "build_grounding_prompt",
    "BLOCKED_MESSAGE",
    "EMPTY_MESSAGE",
    "ResponseSynthesizer",
    "SynthesisResult",
]
