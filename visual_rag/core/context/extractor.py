"""
Context extractor.

One multimodal generation call asking for the ExtractedContext JSON, parsed
by the structured-output parser. Extraction never fails: a failed call or
unparseable output yields the fallback context and the reason is reported
alongside it.

Dependencies: visual_rag.boundary.genai
System role: First stage of the analysis pipeline
"""

import logging

from visual_rag.boundary.genai.gemini_gateway import GeminiGateway
from visual_rag.core.context.prompts import build_extraction_prompt
from visual_rag.core.context.structured_output import (
    Fallback,
    Parsed,
    fallback_context,
    parse_extracted_context,
)
from visual_rag.core.exceptions import VisualRAGException

logger = logging.getLogger(__name__)


class ContextExtractor:
    """Extract an ExtractedContext from an image and optional hint."""

    def __init__(self, gateway: GeminiGateway) -> None:
        self.gateway = gateway

    async def extract(
        self,
        image_bytes: bytes,
        mime_type: str,
        hint: str | None = None,
    ) -> Parsed | Fallback:
        """
        Run extraction.

        Args:
            image_bytes: Validated image
            mime_type: Normalized media type
            hint: Optional user text appended to the instruction

        Returns:
            Parsed or Fallback; never raises
        """
        logger.info(f"{__name__}:extract - START hint_len={len(hint or '')}")
        settings = self.gateway.settings
        try:
            response = await self.gateway.generate(
                build_extraction_prompt(hint),
                image_bytes=image_bytes,
                mime_type=mime_type,
                temperature=settings.extraction_temperature,
                max_output_tokens=settings.extraction_max_output_tokens,
                json_output=True,
            )
            text = response.text
        except VisualRAGException as e:
            logger.warning(f"{__name__}:extract - Generation failed, using fallback - {e.message}")
            return Fallback(f"generation failed: {e.message}", fallback_context(hint))
        except ValueError as e:
            # response.text raises when the candidate has no text parts
            logger.warning(f"{__name__}:extract - No text in response, using fallback - {e}")
            return Fallback("no text in response", fallback_context(hint))

        outcome = parse_extracted_context(text, hint)
        if isinstance(outcome, Fallback):
            logger.warning(f"{__name__}:extract - Parse fallback: {outcome.reason}")
        else:
            logger.info(
                f"{__name__}:extract - END category={outcome.context.primary_category} "
                f"urgency={outcome.context.urgency_level}"
            )
        return outcome
