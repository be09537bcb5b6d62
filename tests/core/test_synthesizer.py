"""
Tests for the response synthesizer.

Uses real google-genai response types so the blocked/empty/ok
classification is checked against the SDK's own structures.

System role: Verification of the final pipeline stage
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import types

from visual_rag.boundary.genai.gemini_gateway import ChatTurnInput
from visual_rag.core.synthesis.synthesizer import (
    BLOCKED_MESSAGE,
    EMPTY_MESSAGE,
    IMAGE_TURN_TEXT,
    ResponseSynthesizer,
    interpret_response,
    to_chat_history,
)


def _response(text: str | None = None, finish_reason=types.FinishReason.STOP, block_reason=None):
    candidates = None
    if text is not None:
        candidates = [
            types.Candidate(
                content=types.Content(role="model", parts=[types.Part(text=text)]),
                finish_reason=finish_reason,
            )
        ]
    feedback = types.GenerateContentResponsePromptFeedback(block_reason=block_reason) if block_reason else None
    return types.GenerateContentResponse(candidates=candidates, prompt_feedback=feedback)


class TestInterpretResponse:
    """Test suite for interpret_response()."""

    def test_ok(self) -> None:
        result = interpret_response(_response("Replace the fuse."))

        assert result.status == "ok"
        assert result.text == "Replace the fuse."

    def test_safety_finish_reason_is_blocked(self) -> None:
        result = interpret_response(_response("", finish_reason=types.FinishReason.SAFETY))

        assert result.blocked
        assert result.text == BLOCKED_MESSAGE

    def test_prompt_feedback_block_is_blocked(self) -> None:
        result = interpret_response(_response(block_reason=types.BlockedReason.SAFETY))

        assert result.status == "blocked"

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_no_text_is_empty(self, text) -> None:
        result = interpret_response(_response(text))

        assert result.status == "empty"
        assert result.text == EMPTY_MESSAGE


class TestToChatHistory:
    """Test suite for to_chat_history()."""

    def test_accepts_all_turn_shapes(self) -> None:
        # Arrange
        turns = [
            {"role": "user", "text": "What is this light?"},
            {"role": "model", "parts": [{"text": "A fault indicator."}]},
            {"role": "assistant", "content": "Check the manual."},
            {"role": "user", "text": ""},
        ]

        # Act
        history = to_chat_history(turns)

        # Assert
        assert history == [
            ChatTurnInput("user", "What is this light?"),
            ChatTurnInput("model", "A fault indicator."),
            ChatTurnInput("model", "Check the manual."),
        ]

    def test_image_only_turn_is_replayed_with_placeholder(self) -> None:
        turns = [
            {"role": "user", "text": "", "imageRef": "sha256:abc"},
            {"role": "model", "text": "A cracked housing."},
        ]

        history = to_chat_history(turns)

        assert history == [
            ChatTurnInput("user", IMAGE_TURN_TEXT),
            ChatTurnInput("model", "A cracked housing."),
        ]


class TestResponseSynthesizer:
    """Test suite for ResponseSynthesizer.synthesize()."""

    @pytest.mark.asyncio
    async def test_sends_prompt_history_and_image(self, png_bytes: bytes) -> None:
        # Arrange
        gateway = MagicMock()
        gateway.chat = AsyncMock(return_value=_response("Unplug it first."))
        history = [ChatTurnInput("user", "hi")]
        synthesizer = ResponseSynthesizer(gateway)

        # Act
        result = await synthesizer.synthesize("prompt", history, image_bytes=png_bytes, mime_type="image/png")

        # Assert
        assert result.status == "ok"
        gateway.chat.assert_awaited_once_with("prompt", history, image_bytes=png_bytes, mime_type="image/png")
