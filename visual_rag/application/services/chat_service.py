"""
Chat service for text-only follow-up questions.

Answers a question about an earlier analysis without a new frame: the
session history (or the caller's history) is replayed into a Gemini chat
with the same safety settings as the analysis pipeline, and both turns are
appended to the session when a session key is given.

Dependencies: visual_rag.core.synthesis, visual_rag.observability, visual_rag.application
System role: Follow-up chat orchestration
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any

from visual_rag.application.services.session_service import SessionService
from visual_rag.boundary.genai.gemini_gateway import GeminiGateway
from visual_rag.core.exceptions import (
    ConfigurationError,
    SafetyBlockedError,
    StoreError,
    UpstreamServiceError,
    ValidationError,
)
from visual_rag.core.synthesis.synthesizer import ResponseSynthesizer, to_chat_history
from visual_rag.models.chat import ChatRequest, ChatResponse
from visual_rag.models.session import ChatTurn
from visual_rag.observability.correlation import bind_session_id
from visual_rag.observability.pipeline_log import ErrorBuffer, EventType, PipelineLogger

logger = logging.getLogger(__name__)


class ChatService:
    """Text chat over an analysis session."""

    def __init__(
        self,
        gateway: GeminiGateway,
        synthesizer: ResponseSynthesizer,
        session_service: SessionService,
        pipeline_logger: PipelineLogger,
        error_buffer: ErrorBuffer,
    ) -> None:
        self.gateway = gateway
        self.synthesizer = synthesizer
        self.session_service = session_service
        self.pipeline_logger = pipeline_logger
        self.error_buffer = error_buffer

    async def chat(self, request: ChatRequest) -> ChatResponse:
        """
        Answer one follow-up question.

        Flow:
        1. Validate the prompt
        2. Load stored turns, falling back to the caller's history
        3. Send the prompt through the chat
        4. Append the user and model turns (best effort)

        Raises:
            ValidationError: Empty prompt (no external call made)
            ConfigurationError: Gemini API key missing
            UpstreamServiceError: Chat call failed
        """
        prompt = (request.prompt or "").strip()
        if not prompt:
            raise ValidationError("Prompt is required", field="prompt")
        if not self.gateway.is_configured:
            raise ConfigurationError("GEMINI_API_KEY is not configured", setting="GEMINI_API_KEY")

        start = time.perf_counter()
        session_id = request.session_id
        if session_id:
            bind_session_id(session_id)
        logger.info(f"{__name__}:chat - START session_id={session_id} prompt_len={len(prompt)}")

        stored = await self._stored_turns(session_id) if session_id else []
        base_turns = stored or [
            ChatTurn(role=turn.role, text=turn.text).model_dump(by_alias=True, mode="json")
            for turn in to_chat_history(request.chat_history)
        ]

        try:
            result = await self.synthesizer.synthesize(prompt, to_chat_history(base_turns))
        except UpstreamServiceError as e:
            self.error_buffer.record(e, "chat", {"session_id": session_id})
            if session_id:
                await self.pipeline_logger.log(
                    session_id,
                    EventType.CHAT_FAILED,
                    {"promptLength": len(prompt)},
                    error_message=e.message,
                    processing_time_ms=int((time.perf_counter() - start) * 1000),
                )
            raise

        if result.blocked:
            self.error_buffer.record(
                SafetyBlockedError(result.text, service="gemini"), "chat", {"session_id": session_id}
            )

        processing_time_ms = int((time.perf_counter() - start) * 1000)
        if session_id:
            now = datetime.now(timezone.utc)
            turns = [
                ChatTurn(role="user", text=prompt, timestamp=now),
                ChatTurn(
                    role="model",
                    text=result.text,
                    timestamp=now,
                    metadata={"textOnly": True, "responseStatus": result.status},
                ),
            ]
            try:
                await self.session_service.append_turns(session_id, turns, base_turns)
            except StoreError as e:
                self.error_buffer.record(e, "chat.session", {"session_id": session_id})
            await self.pipeline_logger.log(
                session_id,
                EventType.CHAT_COMPLETED,
                {"responseStatus": result.status, "responseLength": len(result.text)},
                processing_time_ms=processing_time_ms,
            )

        logger.info(f"{__name__}:chat - END status={result.status} ms={processing_time_ms}")
        return ChatResponse(
            response=result.text,
            response_status=result.status,
            processing_time_ms=processing_time_ms,
            session_id=session_id,
        )

    async def _stored_turns(self, session_id: str) -> list[dict[str, Any]]:
        try:
            return await self.session_service.get_turns(session_id)
        except StoreError as e:
            self.error_buffer.record(e, "chat.history", {"session_id": session_id})
            return []
