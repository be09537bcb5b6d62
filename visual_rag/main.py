"""
FastAPI application entry point.

Builds the app: middleware, error envelope handlers and the /api/v1
routers. The lifespan configures logging and reports missing credentials;
the service starts without them so /config can tell the UI what is missing.

Dependencies: fastapi, uvicorn, visual_rag.api, visual_rag.observability, visual_rag.configs
System role: Application initialization and configuration
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from visual_rag.api.deps import get_service_cache
from visual_rag.api.errors import register_exception_handlers
from visual_rag.api.routers import (
    analyze_router,
    catalog_router,
    chat_router,
    documents_router,
    health_router,
    sessions_router,
    speech_router,
)
from visual_rag.boundary.db.connection import dispose_engine
from visual_rag.configs import get_settings
from visual_rag.observability.logger import configure_logging
from visual_rag.observability.middleware import (
    CORRELATION_HEADER,
    PROCESS_TIME_HEADER,
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"{__name__}:lifespan - START environment={settings.environment}")

    cache = get_service_cache()
    if not cache.gateway.is_configured:
        logger.warning(f"{__name__}:lifespan - GEMINI_API_KEY not set, /analyze will fail until it is configured")
    if not cache.speech_client.is_configured:
        logger.warning(f"{__name__}:lifespan - GOOGLE_TTS_API_KEY not set, speech routes are disabled")

    yield

    cache.clear()
    await dispose_engine()
    logger.info(f"{__name__}:lifespan - Shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()
    app = FastAPI(
        title="Visual RAG Troubleshooting API",
        description="Image-based device troubleshooting grounded in stored documents",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Last added runs first: correlation id is bound before the access log line
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[CORRELATION_HEADER, PROCESS_TIME_HEADER],
    )

    register_exception_handlers(app)

    for router in (
        health_router,
        analyze_router,
        chat_router,
        documents_router,
        sessions_router,
        catalog_router,
        speech_router,
    ):
        app.include_router(router, prefix=API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("visual_rag.main:app", host=settings.host, port=settings.port, reload=True)
