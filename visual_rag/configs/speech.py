"""
Speech configuration settings.

Google Cloud Text-to-Speech and Speech-to-Text REST settings.

Dependencies: pydantic_settings
System role: Speech service configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SpeechSettings(BaseSettings):
    """Google Cloud speech configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GOOGLE_TTS_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(default=None, description="API key (GOOGLE_TTS_API_KEY)")
    tts_url: str = Field(
        default="https://texttospeech.googleapis.com/v1/text:synthesize",
        description="Text-to-Speech endpoint",
    )
    stt_url: str = Field(
        default="https://speech.googleapis.com/v1/speech:recognize",
        description="Speech-to-Text endpoint",
    )

    language_code: str = Field(default="en-US", description="Primary language")
    alternative_language_codes: list[str] = Field(
        default=["ja-JP"],
        description="Extra languages accepted by recognition",
    )
    voice_name: str = Field(default="en-US-Neural2-F", description="TTS voice name")
    ssml_gender: str = Field(default="FEMALE", description="TTS voice gender")
    speaking_rate: float = Field(default=1.0, description="TTS speaking rate")
    max_text_length: int = Field(default=5000, description="Characters sent to TTS before truncation")

    stt_encoding: str = Field(default="WEBM_OPUS", description="Recorded audio encoding")
    stt_sample_rate_hertz: int = Field(default=48000, description="Recorded audio sample rate")
