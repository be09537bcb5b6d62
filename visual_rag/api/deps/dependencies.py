"""
Dependency injection container.

Factory functions for FastAPI dependencies. Process-wide components
(Gemini gateway, speech client, event and error buffers) live in a
ServiceCache; request-scoped services are built per request around the
injected AsyncSession.

Dependencies: visual_rag.configs, visual_rag.application, visual_rag.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from visual_rag.application.services import (
    AnalysisService,
    CatalogService,
    ChatService,
    DocumentService,
    SessionService,
    SpeechService,
)
from visual_rag.boundary.db.connection import get_async_db, get_async_session_factory
from visual_rag.boundary.db.document_store import SqlDocumentStore
from visual_rag.boundary.genai.gemini_gateway import GeminiGateway
from visual_rag.boundary.speech.google_speech_client import GoogleSpeechClient
from visual_rag.configs import Settings, get_settings
from visual_rag.core.context.extractor import ContextExtractor
from visual_rag.core.embedding.adapter import EmbeddingAdapter
from visual_rag.core.retrieval.retriever import DocumentRetriever
from visual_rag.core.synthesis.synthesizer import ResponseSynthesizer
from visual_rag.core.tagging import IndicatorExtractor
from visual_rag.observability.pipeline_log import (
    BoundedEventBuffer,
    DatabaseEventSink,
    ErrorBuffer,
    PipelineLogger,
)


class ServiceCache:
    """Container for cached process-wide instances."""

    def __init__(self):
        self._gateway = None
        self._speech_client = None
        self._event_buffer = None
        self._error_buffer = None
        self._pipeline_logger = None

    @property
    def gateway(self) -> GeminiGateway:
        if self._gateway is None:
            self._gateway = GeminiGateway(get_settings().gemini)
        return self._gateway

    @property
    def speech_client(self) -> GoogleSpeechClient:
        if self._speech_client is None:
            self._speech_client = GoogleSpeechClient(get_settings().speech)
        return self._speech_client

    @property
    def event_buffer(self) -> BoundedEventBuffer:
        if self._event_buffer is None:
            self._event_buffer = BoundedEventBuffer(get_settings().pipeline_log.buffer_size)
        return self._event_buffer

    @property
    def error_buffer(self) -> ErrorBuffer:
        if self._error_buffer is None:
            self._error_buffer = ErrorBuffer(get_settings().pipeline_log.error_buffer_size)
        return self._error_buffer

    @property
    def pipeline_logger(self) -> PipelineLogger:
        """Fan-out logger: in-memory buffer, plus analysis_logs when persistence is on."""
        if self._pipeline_logger is None:
            sinks = [self.event_buffer]
            if get_settings().pipeline_log.persist_events:
                sinks.append(DatabaseEventSink(get_async_session_factory()))
            self._pipeline_logger = PipelineLogger(sinks)
        return self._pipeline_logger

    def clear(self) -> None:
        """Clear all cached instances."""
        self._gateway = None
        self._speech_client = None
        self._event_buffer = None
        self._error_buffer = None
        self._pipeline_logger = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    return get_settings()


def get_session_service(db: AsyncSession = Depends(get_async_db)) -> SessionService:
    return SessionService(db=db)


def get_analysis_service(db: AsyncSession = Depends(get_async_db)) -> AnalysisService:
    """
    Wire the analysis pipeline around one request's database session.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        AnalysisService: Service with extractor, embedder, retriever and synthesizer
    """
    settings = get_settings()
    cache = get_service_cache()
    gateway = cache.gateway
    return AnalysisService(
        db=db,
        gateway=gateway,
        extractor=ContextExtractor(gateway),
        embedder=EmbeddingAdapter(gateway, settings.gemini),
        retriever=DocumentRetriever(SqlDocumentStore(db), settings.retrieval),
        synthesizer=ResponseSynthesizer(gateway),
        pipeline_logger=cache.pipeline_logger,
        error_buffer=cache.error_buffer,
        session_service=SessionService(db=db),
    )


def get_chat_service(db: AsyncSession = Depends(get_async_db)) -> ChatService:
    cache = get_service_cache()
    gateway = cache.gateway
    return ChatService(
        gateway=gateway,
        synthesizer=ResponseSynthesizer(gateway),
        session_service=SessionService(db=db),
        pipeline_logger=cache.pipeline_logger,
        error_buffer=cache.error_buffer,
    )


def get_document_service(db: AsyncSession = Depends(get_async_db)) -> DocumentService:
    gateway = get_service_cache().gateway
    return DocumentService(
        db=db,
        embedder=EmbeddingAdapter(gateway, get_settings().gemini),
        indicator_extractor=IndicatorExtractor(gateway),
    )


def get_catalog_service(db: AsyncSession = Depends(get_async_db)) -> CatalogService:
    cache = get_service_cache()
    return CatalogService(db=db, error_buffer=cache.error_buffer, event_buffer=cache.event_buffer)


def get_speech_service() -> SpeechService:
    return SpeechService(get_service_cache().speech_client)
