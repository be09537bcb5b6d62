"""
Test suite for GeminiGateway.

The genai client is replaced by a MagicMock; calls still go through
asyncio.to_thread.

System role: Verification of request building and SDK error translation
"""

from unittest.mock import MagicMock

import pytest
from google.genai import errors as genai_errors
from google.genai import types

from visual_rag.boundary.genai.gemini_gateway import ChatTurnInput, GeminiGateway, SAFETY_SETTINGS
from visual_rag.configs.gemini import GeminiSettings
from visual_rag.core.exceptions import ConfigurationError, UpstreamServiceError


@pytest.fixture
def genai_client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def gateway(gemini_settings, genai_client) -> GeminiGateway:
    return GeminiGateway(gemini_settings, client=genai_client)


class TestConfiguration:
    """Test suite for lazy client creation."""

    def test_missing_key(self) -> None:
        gateway = GeminiGateway(GeminiSettings(api_key=None))

        assert gateway.is_configured is False
        with pytest.raises(ConfigurationError) as exc_info:
            _ = gateway.client
        assert exc_info.value.details == {"setting": "GEMINI_API_KEY"}

    def test_injected_client_counts_as_configured(self, genai_client) -> None:
        assert GeminiGateway(GeminiSettings(api_key=None), client=genai_client).is_configured is True


class TestGenerate:
    """Test suite for GeminiGateway.generate()."""

    @pytest.mark.asyncio
    async def test_json_generation_with_image(self, gateway, genai_client, png_bytes) -> None:
        # Arrange
        genai_client.models.generate_content.return_value = "response"

        # Act
        result = await gateway.generate("describe", png_bytes, "image/png", temperature=0.2, json_output=True)

        # Assert
        assert result == "response"
        kwargs = genai_client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == gateway.settings.generation_model
        assert len(kwargs["contents"]) == 2
        assert kwargs["contents"][1].inline_data.mime_type == "image/png"
        assert kwargs["config"].response_mime_type == "application/json"
        assert kwargs["config"].temperature == 0.2
        assert kwargs["config"].safety_settings == SAFETY_SETTINGS

    @pytest.mark.asyncio
    async def test_text_only(self, gateway, genai_client) -> None:
        await gateway.generate("hello")

        kwargs = genai_client.models.generate_content.call_args.kwargs
        assert len(kwargs["contents"]) == 1
        assert kwargs["config"].response_mime_type is None


class TestEmbed:
    """Test suite for GeminiGateway.embed()."""

    @pytest.mark.asyncio
    async def test_returns_first_embedding(self, gateway, genai_client, png_bytes) -> None:
        genai_client.models.embed_content.return_value = types.EmbedContentResponse(
            embeddings=[types.ContentEmbedding(values=[0.1, 0.2])]
        )

        values = await gateway.embed(png_bytes, "image/png")

        assert values == [0.1, 0.2]
        config = genai_client.models.embed_content.call_args.kwargs["config"]
        assert config.output_dimensionality == 8

    @pytest.mark.asyncio
    async def test_no_embeddings(self, gateway, genai_client, png_bytes) -> None:
        genai_client.models.embed_content.return_value = types.EmbedContentResponse(embeddings=[])

        assert await gateway.embed(png_bytes, "image/png") == []


class TestChat:
    """Test suite for GeminiGateway.chat()."""

    @pytest.mark.asyncio
    async def test_seeds_history_and_sends_parts(self, gateway, genai_client, png_bytes) -> None:
        # Arrange
        chat = MagicMock()
        chat.send_message.return_value = "answer"
        genai_client.chats.create.return_value = chat
        history = [ChatTurnInput("user", "what is this?"), ChatTurnInput("model", "a router")]

        # Act
        result = await gateway.chat("grounded prompt", history, png_bytes, "image/png")

        # Assert
        assert result == "answer"
        create_kwargs = genai_client.chats.create.call_args.kwargs
        assert [c.role for c in create_kwargs["history"]] == ["user", "model"]
        assert create_kwargs["history"][1].parts[0].text == "a router"
        assert create_kwargs["config"].top_k == gateway.settings.top_k
        parts = chat.send_message.call_args.args[0]
        assert parts[0].text == "grounded prompt"
        assert parts[1].inline_data.data == png_bytes


class TestErrorTranslation:
    """Test suite for SDK error mapping."""

    @pytest.mark.asyncio
    async def test_quota_error(self, gateway, genai_client) -> None:
        # Arrange
        genai_client.models.generate_content.side_effect = genai_errors.ClientError(
            429,
            {"error": {"code": 429, "message": "Quota exceeded", "status": "RESOURCE_EXHAUSTED"}},
        )

        # Act
        with pytest.raises(UpstreamServiceError) as exc_info:
            await gateway.generate("hello")

        # Assert
        error = exc_info.value
        assert error.message == "AI service quota exceeded. Please try again later."
        assert error.details["code"] == 429
        assert error.details["service"] == "gemini"

    @pytest.mark.asyncio
    async def test_unexpected_error(self, gateway, genai_client) -> None:
        genai_client.models.generate_content.side_effect = RuntimeError("socket closed")

        with pytest.raises(UpstreamServiceError) as exc_info:
            await gateway.generate("hello")

        assert exc_info.value.message == "AI service error: socket closed"
        assert exc_info.value.details["error_type"] == "RuntimeError"
