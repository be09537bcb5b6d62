"""
Speech and configuration status schemas.

Dependencies: pydantic
System role: Speech and config API contracts
"""

from pydantic import Field

from visual_rag.models.common import CamelModel, SuccessEnvelope


class SynthesizeRequest(CamelModel):
    text: str = Field(description="Text to speak")


class TranscribeResponse(SuccessEnvelope):
    transcript: str
    message: str | None = None


class ConfigStatusResponse(CamelModel):
    gemini: bool
    tts: bool
    message: str
