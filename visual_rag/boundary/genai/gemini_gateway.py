"""
Gemini gateway.

Wraps the synchronous google-genai client: every call runs in a worker
thread via asyncio.to_thread so the event loop is never blocked. SDK errors
are translated into UpstreamServiceError with a user-facing message.

Dependencies: google-genai, visual_rag.configs
System role: Single point of contact with the Gemini API
"""

import asyncio
import logging
from dataclasses import dataclass

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from visual_rag.configs.gemini import GeminiSettings
from visual_rag.core.exceptions import (
    ConfigurationError,
    UpstreamServiceError,
    translate_upstream_message,
)

logger = logging.getLogger(__name__)

SAFETY_SETTINGS = [
    types.SafetySetting(
        category=types.HarmCategory.HARM_CATEGORY_HARASSMENT,
        threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    ),
    types.SafetySetting(
        category=types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
        threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    ),
    types.SafetySetting(
        category=types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
        threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    ),
    types.SafetySetting(
        category=types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
        threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    ),
]


@dataclass(frozen=True)
class ChatTurnInput:
    """Prior chat turn replayed into a Gemini chat (role is user or model)."""

    role: str
    text: str


class GeminiGateway:
    """
    Async facade over genai.Client.

    The client is created lazily so the service starts (and /config reports
    the missing key) without GEMINI_API_KEY.

    Attributes:
        settings: Gemini configuration
    """

    def __init__(self, settings: GeminiSettings, client: "genai.Client | None" = None) -> None:
        self.settings = settings
        self._client = client

    @property
    def is_configured(self) -> bool:
        return self._client is not None or bool(self.settings.api_key)

    @property
    def client(self) -> "genai.Client":
        if self._client is None:
            if not self.settings.api_key:
                raise ConfigurationError(
                    "GEMINI_API_KEY is not configured",
                    setting="GEMINI_API_KEY",
                )
            self._client = genai.Client(api_key=self.settings.api_key)
        return self._client

    @staticmethod
    def image_part(image_bytes: bytes, mime_type: str) -> types.Part:
        return types.Part.from_bytes(data=image_bytes, mime_type=mime_type)

    async def generate(
        self,
        prompt: str,
        image_bytes: bytes | None = None,
        mime_type: str | None = None,
        temperature: float | None = None,
        max_output_tokens: int | None = None,
        json_output: bool = False,
    ) -> types.GenerateContentResponse:
        """
        Single-shot generation with optional image.

        Args:
            prompt: Instruction text
            image_bytes: Optional image sent after the text part
            mime_type: Media type of the image
            temperature: Sampling temperature override
            max_output_tokens: Token cap override
            json_output: Request application/json output

        Returns:
            GenerateContentResponse: Raw SDK response

        Raises:
            ConfigurationError: API key missing
            UpstreamServiceError: SDK call failed
        """
        contents: list[types.Part] = [types.Part.from_text(text=prompt)]
        if image_bytes is not None:
            contents.append(self.image_part(image_bytes, mime_type or "image/jpeg"))

        config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            response_mime_type="application/json" if json_output else None,
            safety_settings=SAFETY_SETTINGS,
        )
        logger.debug(f"{__name__}:generate - model={self.settings.generation_model} json={json_output}")
        return await self._call(
            "generate",
            self.client.models.generate_content,
            model=self.settings.generation_model,
            contents=contents,
            config=config,
        )

    async def embed(self, image_bytes: bytes, mime_type: str) -> list[float]:
        """
        Embed one image.

        Returns:
            list[float]: Raw embedding values (may be empty)
        """
        response = await self._call(
            "embed",
            self.client.models.embed_content,
            model=self.settings.embedding_model,
            contents=[self.image_part(image_bytes, mime_type)],
            config=types.EmbedContentConfig(
                output_dimensionality=self.settings.embedding_dimensions,
            ),
        )
        if not response.embeddings:
            return []
        return list(response.embeddings[0].values or [])

    async def chat(
        self,
        message: str,
        history: list[ChatTurnInput],
        image_bytes: bytes | None = None,
        mime_type: str | None = None,
    ) -> types.GenerateContentResponse:
        """
        Send one message through a chat seeded with prior turns.

        Args:
            message: Grounding prompt
            history: Prior turns, oldest first
            image_bytes: Optional image attached to the message
            mime_type: Media type of the image

        Returns:
            GenerateContentResponse: Raw SDK response
        """
        config = types.GenerateContentConfig(
            temperature=self.settings.temperature,
            top_k=self.settings.top_k,
            top_p=self.settings.top_p,
            max_output_tokens=self.settings.max_output_tokens,
            safety_settings=SAFETY_SETTINGS,
        )
        seeded = [
            types.Content(role=turn.role, parts=[types.Part.from_text(text=turn.text)])
            for turn in history
        ]
        parts: list[types.Part] = [types.Part.from_text(text=message)]
        if image_bytes is not None:
            parts.append(self.image_part(image_bytes, mime_type or "image/jpeg"))

        chat = self.client.chats.create(
            model=self.settings.generation_model,
            config=config,
            history=seeded,
        )
        logger.debug(f"{__name__}:chat - history_turns={len(seeded)} parts={len(parts)}")
        return await self._call("chat", chat.send_message, parts)

    async def _call(self, operation: str, func, *args, **kwargs):
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except genai_errors.APIError as e:
            logger.error(
                f"{__name__}:{operation} - FAILED - {type(e).__name__} code={e.code}: {e.message}"
            )
            raise UpstreamServiceError(
                translate_upstream_message(f"{e.status or ''} {e.message or ''}".strip()),
                service="gemini",
                details={"operation": operation, "code": e.code},
            ) from e
        except Exception as e:
            logger.error(f"{__name__}:{operation} - FAILED - {type(e).__name__}: {e}")
            raise UpstreamServiceError(
                translate_upstream_message(str(e)),
                service="gemini",
                details={"operation": operation, "error_type": type(e).__name__},
            ) from e
