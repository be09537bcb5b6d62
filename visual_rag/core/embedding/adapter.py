"""
Image embedding adapter.

Validates the media type, calls the Gemini embedding endpoint with bounded
exponential-backoff retries, and normalizes the vector to the configured
width (zero-padded or truncated, never renormalized).

Dependencies: tenacity, visual_rag.boundary.genai, visual_rag.configs
System role: Produces query and document embeddings for pgvector search
"""

import asyncio
import logging
import math
from typing import Awaitable, Callable

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from visual_rag.boundary.genai.gemini_gateway import GeminiGateway
from visual_rag.configs.gemini import GeminiSettings
from visual_rag.core.exceptions import ConfigurationError, EmbeddingFailedError, ValidationError
from visual_rag.core.media import validate_image_bytes, validate_media_type

logger = logging.getLogger(__name__)


class EmptyEmbeddingError(Exception):
    """The endpoint answered with no values; treated as transient."""


def normalize_dimensions(values: list[float], target: int) -> list[float]:
    """
    Pad with zeros or truncate to exactly `target` values.

    Args:
        values: Raw embedding
        target: Required width

    Returns:
        list[float]: Vector of length target
    """
    if len(values) >= target:
        return [float(v) for v in values[:target]]
    return [float(v) for v in values] + [0.0] * (target - len(values))


class EmbeddingAdapter:
    """
    Embed images with retries.

    Attributes:
        gateway: Gemini gateway
        settings: Gemini configuration (width, attempts, backoff)
    """

    def __init__(
        self,
        gateway: GeminiGateway,
        settings: GeminiSettings,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.gateway = gateway
        self.settings = settings
        self._sleep = sleep

    def _log_retry(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            f"{__name__}:embed - Retry {retry_state.attempt_number}/{self.settings.embedding_max_attempts} "
            f"after {type(error).__name__}: {error}"
        )

    async def embed(self, image_bytes: bytes, mime_type: str) -> list[float]:
        """
        Embed one image.

        Args:
            image_bytes: Raw image
            mime_type: Declared media type

        Returns:
            list[float]: Finite vector of the configured width

        Raises:
            ValidationError: Empty input or unsupported media type (no call made)
            ConfigurationError: Gemini API key missing
            EmbeddingFailedError: All attempts failed, or non-finite values returned
        """
        normalized_type = validate_media_type(mime_type)
        validate_image_bytes(image_bytes)

        max_attempts = self.settings.embedding_max_attempts
        attempts = 0
        values: list[float] = []
        logger.info(f"{__name__}:embed - START bytes={len(image_bytes)} type={normalized_type}")

        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_not_exception_type((ConfigurationError, ValidationError)),
                stop=stop_after_attempt(max_attempts),
                wait=wait_exponential(
                    multiplier=self.settings.embedding_backoff_base,
                    max=self.settings.embedding_backoff_max,
                ),
                sleep=self._sleep,
                before_sleep=self._log_retry,
                reraise=True,
            ):
                with attempt:
                    attempts = attempt.retry_state.attempt_number
                    values = await self.gateway.embed(image_bytes, normalized_type)
                    if not values:
                        raise EmptyEmbeddingError("embedding endpoint returned no values")
        except (ConfigurationError, ValidationError):
            raise
        except Exception as e:
            logger.error(f"{__name__}:embed - FAILED after {attempts} attempts - {type(e).__name__}: {e}")
            raise EmbeddingFailedError(
                f"Embedding failed after {attempts} attempts",
                attempts=attempts,
                details={"last_error": str(e)},
            ) from e

        if not all(math.isfinite(v) for v in values):
            raise EmbeddingFailedError("Embedding contains non-finite values", attempts=attempts)

        vector = normalize_dimensions(values, self.settings.embedding_dimensions)
        logger.info(
            f"{__name__}:embed - END attempts={attempts} raw_dims={len(values)} "
            f"dims={len(vector)}"
        )
        return vector
