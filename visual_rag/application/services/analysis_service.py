"""
Analysis service.

Runs one analysis request end to end:
  1. Validate the image (before any external call)
  2. Extract context (falls back, never fails)
  3. Embed the image (failure degrades to keyword-only retrieval)
  4. Retrieve documents
  5. Synthesize the answer
  6. Append the turns to the session (best effort)

Pipeline events are emitted at every stage boundary.

Dependencies: visual_rag.core, visual_rag.observability, visual_rag.boundary.db
System role: Analysis use case orchestration
"""

import hashlib
import logging
import secrets
import string
import time
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from visual_rag.application.services.session_service import SessionService
from visual_rag.boundary.db.CRUD.analysis_prompt_crud import analysis_prompt_crud
from visual_rag.boundary.genai.gemini_gateway import GeminiGateway
from visual_rag.core.context.extractor import ContextExtractor
from visual_rag.core.context.structured_output import Fallback
from visual_rag.core.embedding.adapter import EmbeddingAdapter
from visual_rag.core.exceptions import (
    ConfigurationError,
    EmbeddingFailedError,
    SafetyBlockedError,
    StoreError,
    UpstreamServiceError,
)
from visual_rag.core.media import decode_image
from visual_rag.core.retrieval.retriever import DocumentRetriever
from visual_rag.core.synthesis.default_prompts import default_prompt_text
from visual_rag.core.synthesis.prompt_builder import build_grounding_prompt
from visual_rag.core.synthesis.synthesizer import IMAGE_TURN_TEXT, ResponseSynthesizer, to_chat_history
from visual_rag.models.analysis import AnalyzeRequest, AnalyzeResponse, RetrievedDocumentOut
from visual_rag.models.session import ChatTurn
from visual_rag.observability.correlation import bind_session_id
from visual_rag.observability.log_utils import log_exception_with_context
from visual_rag.observability.pipeline_log import ErrorBuffer, EventType, PipelineLogger

logger = logging.getLogger(__name__)

_SESSION_ALPHABET = string.ascii_lowercase + string.digits


def generate_session_id() -> str:
    """analysis_<epoch ms>_<9 random base36 chars>"""
    suffix = "".join(secrets.choice(_SESSION_ALPHABET) for _ in range(9))
    return f"analysis_{int(time.time() * 1000)}_{suffix}"


def image_reference(image_bytes: bytes) -> str:
    return f"sha256:{hashlib.sha256(image_bytes).hexdigest()}"


class AnalysisService:
    """
    Analysis pipeline orchestrator.

    Components are injected so tests can replace any stage.
    """

    def __init__(
        self,
        db: AsyncSession,
        gateway: GeminiGateway,
        extractor: ContextExtractor,
        embedder: EmbeddingAdapter,
        retriever: DocumentRetriever,
        synthesizer: ResponseSynthesizer,
        pipeline_logger: PipelineLogger,
        error_buffer: ErrorBuffer,
        session_service: SessionService | None = None,
    ) -> None:
        self.db = db
        self.gateway = gateway
        self.extractor = extractor
        self.embedder = embedder
        self.retriever = retriever
        self.synthesizer = synthesizer
        self.pipeline_logger = pipeline_logger
        self.error_buffer = error_buffer
        self.session_service = session_service or SessionService(db)

    async def analyze(self, request: AnalyzeRequest) -> AnalyzeResponse:
        """
        Run the analysis pipeline.

        Args:
            request: Analyze request body

        Returns:
            AnalyzeResponse: Answer, context, documents and timing

        Raises:
            ValidationError: Invalid image (no external call made)
            ConfigurationError: Gemini API key missing
            UpstreamServiceError: Synthesis call failed
        """
        start = time.perf_counter()
        image_bytes, mime_type = decode_image(request.image_base64, request.mime_type)

        if not self.gateway.is_configured:
            raise ConfigurationError("GEMINI_API_KEY is not configured", setting="GEMINI_API_KEY")

        session_id = request.session_id or generate_session_id()
        bind_session_id(session_id)
        logger.info(f"{__name__}:analyze - START session_id={session_id} bytes={len(image_bytes)}")

        def elapsed_ms() -> int:
            return int((time.perf_counter() - start) * 1000)

        await self.pipeline_logger.log(
            session_id,
            EventType.ANALYSIS_STARTED,
            {
                "mimeType": mime_type,
                "imageBytes": len(image_bytes),
                "hasUserText": bool(request.user_text),
                "category": request.category,
                "analysisType": request.analysis_type,
            },
        )

        # Step 1: Context extraction
        outcome = await self.extractor.extract(image_bytes, mime_type, request.user_text)
        context = outcome.context
        context_source = "fallback" if isinstance(outcome, Fallback) else "model"
        await self.pipeline_logger.log(
            session_id,
            EventType.CONTEXT_EXTRACTED,
            {
                "source": context_source,
                "reason": outcome.reason if isinstance(outcome, Fallback) else None,
                "extractedContext": context.model_dump(by_alias=True),
            },
            processing_time_ms=elapsed_ms(),
        )

        # Step 2: Embedding
        embedding: list[float] | None = None
        try:
            embedding = await self.embedder.embed(image_bytes, mime_type)
        except EmbeddingFailedError as e:
            self.error_buffer.record(e, "analysis.embedding", {"session_id": session_id})
            await self.pipeline_logger.log(
                session_id,
                EventType.EMBEDDING_FAILED,
                {"attempts": e.attempts},
                error_message=e.message,
                processing_time_ms=elapsed_ms(),
            )

        # Step 3: Retrieval
        category_filter = self._category_filter(request.category, context.primary_category)
        results = await self.retriever.retrieve(context, embedding, category_filter)
        await self.pipeline_logger.log(
            session_id,
            EventType.DOCUMENTS_RETRIEVED,
            {
                "count": len(results),
                "categoryFilter": category_filter,
                "documents": [
                    {"id": r.document.id, "score": r.relevance_score, "similarity": r.similarity}
                    for r in results
                ],
            },
            processing_time_ms=elapsed_ms(),
        )

        # Step 4: Synthesis
        system_prompt = request.system_prompt or await self._catalog_prompt(request.analysis_type)
        stored_turns = await self._stored_turns(session_id)
        base_turns = stored_turns or [
            ChatTurn(role=turn.role, text=turn.text).model_dump(by_alias=True, mode="json")
            for turn in to_chat_history(request.chat_history)
        ]
        prompt = build_grounding_prompt(context, results, request.user_text, system_prompt)
        try:
            synthesis = await self.synthesizer.synthesize(
                prompt,
                to_chat_history(base_turns),
                image_bytes=image_bytes,
                mime_type=mime_type,
            )
        except UpstreamServiceError as e:
            log_exception_with_context(logger, f"{__name__}:analyze - Synthesis failed", e, session_id=session_id)
            self.error_buffer.record(e, "analysis.synthesis", {"session_id": session_id})
            await self.pipeline_logger.log(
                session_id,
                EventType.ANALYSIS_FAILED,
                {"stage": "synthesis"},
                error_message=e.message,
                processing_time_ms=elapsed_ms(),
            )
            raise

        if synthesis.blocked:
            self.error_buffer.record(
                SafetyBlockedError(synthesis.text, service="gemini"),
                "analysis.synthesis",
                {"session_id": session_id},
            )

        processing_time_ms = elapsed_ms()

        # Step 5: Session persistence
        now = datetime.now(timezone.utc)
        new_turns = [
            ChatTurn(
                role="user",
                text=(request.user_text or "").strip() or IMAGE_TURN_TEXT,
                image_ref=image_reference(image_bytes),
                timestamp=now,
            ),
            ChatTurn(
                role="model",
                text=synthesis.text,
                timestamp=now,
                metadata={
                    "extractedContext": context.model_dump(by_alias=True),
                    "matchCount": len(results),
                    "documentIds": [r.document.id for r in results],
                    "responseStatus": synthesis.status,
                    "processingTimeMs": processing_time_ms,
                },
            ),
        ]
        try:
            await self.session_service.append_turns(session_id, new_turns, base_turns)
        except StoreError as e:
            self.error_buffer.record(e, "analysis.session", {"session_id": session_id})

        await self.pipeline_logger.log(
            session_id,
            EventType.ANALYSIS_COMPLETED,
            {
                "responseStatus": synthesis.status,
                "matchCount": len(results),
                "responseLength": len(synthesis.text),
            },
            processing_time_ms=processing_time_ms,
        )
        logger.info(
            f"{__name__}:analyze - END session_id={session_id} status={synthesis.status} "
            f"matches={len(results)} ms={processing_time_ms}"
        )

        return AnalyzeResponse(
            response=synthesis.text,
            response_status=synthesis.status,
            extracted_context=context,
            context_source=context_source,
            retrieved_documents=[
                RetrievedDocumentOut(
                    id=r.document.id,
                    title=r.document.title,
                    category=r.document.category,
                    severity_level=r.document.severity_level,
                    relevance_score=r.relevance_score,
                    similarity=r.similarity,
                    icon_name=r.document.icon_name,
                    icon_description=r.document.icon_description,
                    tags=r.document.tags,
                )
                for r in results
            ],
            match_count=len(results),
            processing_time_ms=processing_time_ms,
            session_id=session_id,
        )

    @staticmethod
    def _category_filter(requested: str | None, extracted: str) -> str | None:
        """Request category first, then the extracted one; "general" means no filter."""
        for candidate in (requested, extracted):
            if candidate and candidate.strip().lower() != "general":
                return candidate.strip().lower()
        return None

    async def _catalog_prompt(self, analysis_type: str | None) -> str:
        focus = (analysis_type or "general").strip().lower()
        try:
            async with self.db.begin_nested():
                row = await analysis_prompt_crud.get_by_focus(self.db, focus)
        except SQLAlchemyError as e:
            logger.warning(f"{__name__}:_catalog_prompt - Prompt lookup failed - {type(e).__name__}: {e}")
            row = None
        return row.prompt_text if row else default_prompt_text(focus)

    async def _stored_turns(self, session_id: str) -> list[dict[str, Any]]:
        try:
            return await self.session_service.get_turns(session_id)
        except StoreError as e:
            self.error_buffer.record(e, "analysis.history", {"session_id": session_id})
            return []
