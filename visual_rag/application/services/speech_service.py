"""
Speech service.

Thin validation layer over the Google speech client.

Dependencies: visual_rag.boundary.speech
System role: Text-to-speech and speech-to-text use cases
"""

import logging

from visual_rag.boundary.speech.google_speech_client import GoogleSpeechClient, Transcription
from visual_rag.core.exceptions import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)

NO_SPEECH_MESSAGE = "No speech detected"


class SpeechService:
    def __init__(self, client: GoogleSpeechClient) -> None:
        self.client = client

    def _require_configured(self) -> None:
        if not self.client.is_configured:
            raise ConfigurationError("GOOGLE_TTS_API_KEY is not configured", setting="GOOGLE_TTS_API_KEY")

    async def synthesize(self, text: str) -> bytes:
        """
        Text to MP3 audio.

        Raises:
            ValidationError: Empty text
            ConfigurationError: Speech API key missing
            UpstreamServiceError: Google API failure
        """
        if not text or not text.strip():
            raise ValidationError("Text is required", field="text")
        self._require_configured()
        audio = await self.client.synthesize(text.strip())
        logger.info(f"{__name__}:synthesize - chars={len(text)} audio_bytes={len(audio)}")
        return audio

    async def transcribe(self, audio_bytes: bytes) -> Transcription:
        """Audio to text; an empty recognition result is not an error."""
        if not audio_bytes:
            raise ValidationError("Audio file is required", field="audio")
        self._require_configured()
        result = await self.client.transcribe(audio_bytes)
        if not result.recognized:
            logger.info(f"{__name__}:transcribe - {NO_SPEECH_MESSAGE}")
        return result
