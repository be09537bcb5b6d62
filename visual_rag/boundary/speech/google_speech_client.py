"""
Google Cloud speech client.

Calls the Text-to-Speech and Speech-to-Text REST endpoints with an API key
over httpx. HTTP failures are translated into UpstreamServiceError carrying
the API's own error message when it provides one.

Dependencies: httpx, visual_rag.configs
System role: Voice input/output for the analysis UI
"""

import base64
import binascii
import logging
from dataclasses import dataclass

import httpx

from visual_rag.configs.speech import SpeechSettings
from visual_rag.core.exceptions import ConfigurationError, UpstreamServiceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transcription:
    transcript: str
    recognized: bool


def truncate_for_tts(text: str, max_length: int) -> str:
    """Cut text longer than max_length and mark the cut with '...'."""
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


def _error_message(response: httpx.Response, service: str) -> str:
    try:
        payload = response.json()
    except ValueError:
        return f"{service} API: HTTP {response.status_code}"
    message = (payload.get("error") or {}).get("message") if isinstance(payload, dict) else None
    return f"{service} API: {message}" if message else f"{service} API: HTTP {response.status_code}"


class GoogleSpeechClient:
    """
    REST client for Google Cloud speech APIs.

    Attributes:
        settings: Speech configuration (key, endpoints, voice, audio format)
    """

    def __init__(self, settings: SpeechSettings, http_client: httpx.AsyncClient | None = None) -> None:
        self.settings = settings
        self._http_client = http_client

    @property
    def is_configured(self) -> bool:
        return bool(self.settings.api_key)

    def _require_key(self) -> str:
        if not self.settings.api_key:
            raise ConfigurationError("GOOGLE_TTS_API_KEY is not configured", setting="GOOGLE_TTS_API_KEY")
        return self.settings.api_key

    async def _post(self, url: str, payload: dict, service: str) -> dict:
        params = {"key": self._require_key()}
        try:
            if self._http_client is not None:
                response = await self._http_client.post(url, params=params, json=payload)
            else:
                async with httpx.AsyncClient(timeout=60.0) as client:
                    response = await client.post(url, params=params, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"{__name__}:_post - {service} request failed - {type(e).__name__}: {e}")
            raise UpstreamServiceError(f"{service} API request failed: {e}", service=service) from e

        if response.status_code >= 400:
            message = _error_message(response, service)
            logger.error(f"{__name__}:_post - {service} HTTP {response.status_code}: {message}")
            raise UpstreamServiceError(message, service=service, details={"status": response.status_code})
        return response.json()

    async def synthesize(self, text: str) -> bytes:
        """
        Convert text to MP3 audio.

        Args:
            text: Text to speak (truncated beyond max_text_length)

        Returns:
            bytes: MP3 audio

        Raises:
            ConfigurationError: API key missing
            UpstreamServiceError: HTTP failure or no audio in the response
        """
        truncated = truncate_for_tts(text, self.settings.max_text_length)
        logger.info(f"{__name__}:synthesize - START chars={len(truncated)} voice={self.settings.voice_name}")
        payload = {
            "input": {"text": truncated},
            "voice": {
                "languageCode": self.settings.language_code,
                "name": self.settings.voice_name,
                "ssmlGender": self.settings.ssml_gender,
            },
            "audioConfig": {
                "audioEncoding": "MP3",
                "speakingRate": self.settings.speaking_rate,
                "pitch": 0.0,
                "volumeGainDb": 0.0,
            },
        }
        data = await self._post(self.settings.tts_url, payload, "TTS")
        audio_content = data.get("audioContent")
        if not audio_content:
            raise UpstreamServiceError("No audio data was generated", service="TTS")
        try:
            audio = base64.b64decode(audio_content)
        except (binascii.Error, ValueError) as e:
            raise UpstreamServiceError("TTS API returned invalid audio data", service="TTS") from e
        logger.info(f"{__name__}:synthesize - END bytes={len(audio)}")
        return audio

    async def transcribe(self, audio_bytes: bytes) -> Transcription:
        """
        Recognize speech in recorded audio.

        Returns:
            Transcription: recognized=False with an empty transcript when
            the API finds no speech
        """
        logger.info(f"{__name__}:transcribe - START bytes={len(audio_bytes)}")
        payload = {
            "config": {
                "encoding": self.settings.stt_encoding,
                "sampleRateHertz": self.settings.stt_sample_rate_hertz,
                "languageCode": self.settings.language_code,
                "alternativeLanguageCodes": self.settings.alternative_language_codes,
                "enableAutomaticPunctuation": True,
                "enableWordTimeOffsets": False,
            },
            "audio": {"content": base64.b64encode(audio_bytes).decode("ascii")},
        }
        data = await self._post(self.settings.stt_url, payload, "STT")
        results = data.get("results") or []
        if not results:
            logger.info(f"{__name__}:transcribe - END no speech recognized")
            return Transcription(transcript="", recognized=False)

        alternatives = results[0].get("alternatives") or [{}]
        transcript = (alternatives[0].get("transcript") or "").strip()
        logger.info(f"{__name__}:transcribe - END transcript_len={len(transcript)}")
        return Transcription(transcript=transcript, recognized=bool(transcript))
