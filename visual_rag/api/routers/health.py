"""
Health and configuration status endpoints.

Routes:
- GET /health - Liveness
- GET /health/db - Database round trip and pgvector check
- GET /config - Which external credentials are present

Dependencies: visual_rag.api.deps, visual_rag.boundary.db
System role: Liveness and configuration HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from visual_rag.api.deps import get_service_cache
from visual_rag.api.deps.dependencies import ServiceCache
from visual_rag.boundary.db.connection import ping_database
from visual_rag.models.speech import ConfigStatusResponse


class HealthResponse(BaseModel):
    status: str
    message: str


router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/health/db", response_model=HealthResponse)
async def health_check_db() -> HealthResponse:
    """
    Database health check.

    Raises:
        StoreError(503): Connection failed or pgvector missing
    """
    await ping_database()
    return HealthResponse(status="healthy", message="Database connection OK")


@router.get("/config", response_model=ConfigStatusResponse)
async def config_status(cache: ServiceCache = Depends(get_service_cache)) -> ConfigStatusResponse:
    """Report which external services have credentials."""
    gemini = cache.gateway.is_configured
    tts = cache.speech_client.is_configured
    if gemini and tts:
        message = "All services configured"
    elif gemini:
        message = "Gemini configured; Text-to-Speech API key missing"
    elif tts:
        message = "Text-to-Speech configured; Gemini API key missing"
    else:
        message = "Gemini and Text-to-Speech API keys missing"
    return ConfigStatusResponse(gemini=gemini, tts=tts, message=message)
