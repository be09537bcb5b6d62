"""
Test suite for GoogleSpeechClient.

HTTP traffic goes through httpx.MockTransport.

System role: Verification of speech REST payloads and error handling
"""

import base64
import json

import httpx
import pytest

from visual_rag.boundary.speech.google_speech_client import GoogleSpeechClient, truncate_for_tts
from visual_rag.configs.speech import SpeechSettings
from visual_rag.core.exceptions import ConfigurationError, UpstreamServiceError


def client_for(settings: SpeechSettings, handler) -> tuple[GoogleSpeechClient, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(record))
    return GoogleSpeechClient(settings, http_client=http_client), requests


class TestSynthesize:
    """Test suite for GoogleSpeechClient.synthesize()."""

    @pytest.mark.asyncio
    async def test_decodes_audio_and_sends_key(self, speech_settings) -> None:
        # Arrange
        audio = base64.b64encode(b"ID3mp3").decode()
        client, requests = client_for(speech_settings, lambda r: httpx.Response(200, json={"audioContent": audio}))

        # Act
        result = await client.synthesize("Hello there")

        # Assert
        assert result == b"ID3mp3"
        request = requests[0]
        assert request.url.params["key"] == "tts-key"
        body = json.loads(request.content)
        assert body["input"] == {"text": "Hello there"}
        assert body["voice"]["name"] == speech_settings.voice_name
        assert body["audioConfig"]["audioEncoding"] == "MP3"

    @pytest.mark.asyncio
    async def test_long_text_is_truncated(self) -> None:
        settings = SpeechSettings(api_key="k", max_text_length=10)
        audio = base64.b64encode(b"x").decode()
        client, requests = client_for(settings, lambda r: httpx.Response(200, json={"audioContent": audio}))

        await client.synthesize("a" * 50)

        assert json.loads(requests[0].content)["input"]["text"] == "a" * 10 + "..."

    @pytest.mark.asyncio
    async def test_missing_audio(self, speech_settings) -> None:
        client, _ = client_for(speech_settings, lambda r: httpx.Response(200, json={}))

        with pytest.raises(UpstreamServiceError, match="No audio data"):
            await client.synthesize("hi")

    @pytest.mark.asyncio
    async def test_api_error_message(self, speech_settings) -> None:
        client, _ = client_for(
            speech_settings,
            lambda r: httpx.Response(403, json={"error": {"message": "API key not valid"}}),
        )

        with pytest.raises(UpstreamServiceError) as exc_info:
            await client.synthesize("hi")

        assert exc_info.value.message == "TTS API: API key not valid"
        assert exc_info.value.details["status"] == 403

    @pytest.mark.asyncio
    async def test_transport_error(self, speech_settings) -> None:
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        client, _ = client_for(speech_settings, fail)

        with pytest.raises(UpstreamServiceError):
            await client.synthesize("hi")

    @pytest.mark.asyncio
    async def test_missing_key(self) -> None:
        client = GoogleSpeechClient(SpeechSettings(api_key=None))

        assert client.is_configured is False
        with pytest.raises(ConfigurationError):
            await client.synthesize("hi")


class TestTranscribe:
    """Test suite for GoogleSpeechClient.transcribe()."""

    @pytest.mark.asyncio
    async def test_first_alternative(self, speech_settings) -> None:
        # Arrange
        payload = {"results": [{"alternatives": [{"transcript": " reset the router "}, {"transcript": "x"}]}]}
        client, requests = client_for(speech_settings, lambda r: httpx.Response(200, json=payload))

        # Act
        result = await client.transcribe(b"opus")

        # Assert
        assert result.transcript == "reset the router"
        assert result.recognized is True
        body = json.loads(requests[0].content)
        assert body["audio"]["content"] == base64.b64encode(b"opus").decode()
        assert body["config"]["encoding"] == "WEBM_OPUS"

    @pytest.mark.asyncio
    async def test_no_results(self, speech_settings) -> None:
        client, _ = client_for(speech_settings, lambda r: httpx.Response(200, json={}))

        result = await client.transcribe(b"silence")

        assert result.transcript == ""
        assert result.recognized is False


def test_truncate_for_tts_keeps_short_text() -> None:
    assert truncate_for_tts("short", 10) == "short"
