"""API routers."""

from .analyze import router as analyze_router
from .catalog import router as catalog_router
from .chat import router as chat_router
from .documents import router as documents_router
from .health import router as health_router
from .sessions import router as sessions_router
from .speech import router as speech_router

__all__ = [
    "analyze_router",
    "catalog_router",
    "chat_router",
    "documents_router",
    "health_router",
    "sessions_router",
    "speech_router",
]
