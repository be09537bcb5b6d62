"""
Response synthesizer.

Sends the grounding prompt and the image through a Gemini chat seeded with
the prior turns and classifies the outcome. A safety block or an empty
answer is reported with a fixed message instead of an empty string.

Dependencies: google-genai (response types), visual_rag.boundary.genai
System role: Final stage of the analysis pipeline
"""

import logging
from dataclasses import dataclass
from typing import Any, Literal

from google.genai import types

from visual_rag.boundary.genai.gemini_gateway import ChatTurnInput, GeminiGateway

logger = logging.getLogger(__name__)

BLOCKED_MESSAGE = (
    "The response was blocked by content safety filters. "
    "Please try a different image or rephrase your question."
)
EMPTY_MESSAGE = (
    "The AI model did not return an answer for this image. "
    "Please try again with a clearer image or more details."
)

# Text of a user turn that carried only an image
IMAGE_TURN_TEXT = "[image analysis]"

SynthesisStatus = Literal["ok", "blocked", "empty"]


@dataclass(frozen=True)
class SynthesisResult:
    text: str
    status: SynthesisStatus

    @property
    def blocked(self) -> bool:
        return self.status == "blocked"


def to_chat_history(turns: list[dict[str, Any]]) -> list[ChatTurnInput]:
    """
    Convert stored or caller-supplied turns to chat history.

    Accepts {role, text} as well as the {role, parts: [{text}]} and
    {role, content} shapes. Roles other than "user" become "model". A turn
    with an image reference but no text is replayed as IMAGE_TURN_TEXT;
    turns with neither are skipped.
    """
    history: list[ChatTurnInput] = []
    for turn in turns:
        text = turn.get("text")
        if not text and turn.get("parts"):
            first = turn["parts"][0]
            text = first.get("text") if isinstance(first, dict) else None
        if not text:
            text = turn.get("content")
        if (not isinstance(text, str) or not text.strip()) and (turn.get("imageRef") or turn.get("image_ref")):
            text = IMAGE_TURN_TEXT
        if not isinstance(text, str) or not text.strip():
            continue
        role = "user" if turn.get("role") == "user" else "model"
        history.append(ChatTurnInput(role=role, text=text))
    return history


def interpret_response(response: types.GenerateContentResponse) -> SynthesisResult:
    """
    Classify a generation response.

    Returns:
        SynthesisResult: blocked on prompt-feedback block or SAFETY finish
        reason, empty when there is no candidate text, ok otherwise
    """
    feedback = response.prompt_feedback
    if feedback is not None and feedback.block_reason:
        return SynthesisResult(BLOCKED_MESSAGE, "blocked")

    if not response.candidates:
        return SynthesisResult(EMPTY_MESSAGE, "empty")

    candidate = response.candidates[0]
    if candidate.finish_reason == types.FinishReason.SAFETY:
        return SynthesisResult(BLOCKED_MESSAGE, "blocked")

    parts = candidate.content.parts if candidate.content and candidate.content.parts else []
    text = "".join(part.text for part in parts if part.text)
    if not text.strip():
        return SynthesisResult(EMPTY_MESSAGE, "empty")
    return SynthesisResult(text, "ok")


class ResponseSynthesizer:
    """Produce the final answer for an analysis."""

    def __init__(self, gateway: GeminiGateway) -> None:
        self.gateway = gateway

    async def synthesize(
        self,
        prompt: str,
        history: list[ChatTurnInput],
        image_bytes: bytes | None = None,
        mime_type: str | None = None,
    ) -> SynthesisResult:
        """
        Run the synthesis chat.

        Args:
            prompt: Grounding prompt
            history: Prior turns, oldest first
            image_bytes: Image attached to the message
            mime_type: Media type of the image

        Returns:
            SynthesisResult: Never an empty string with status ok

        Raises:
            UpstreamServiceError: Gemini call failed
        """
        logger.info(f"{__name__}:synthesize - START prompt_len={len(prompt)} history={len(history)}")
        response = await self.gateway.chat(prompt, history, image_bytes=image_bytes, mime_type=mime_type)
        result = interpret_response(response)
        if result.status == "ok":
            logger.info(f"{__name__}:synthesize - END response_len={len(result.text)}")
        else:
            logger.warning(f"{__name__}:synthesize - END status={result.status}")
        return result
