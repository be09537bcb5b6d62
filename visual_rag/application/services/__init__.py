"""
Application services.

Each service receives an AsyncSession (and the components it needs) and
orchestrates one family of use cases.
"""

from visual_rag.application.services.analysis_service import AnalysisService
from visual_rag.application.services.catalog_service import CatalogService
from visual_rag.application.services.chat_service import ChatService
from visual_rag.application.services.document_service import DocumentService
from visual_rag.application.services.session_service import SessionService
from visual_rag.application.services.speech_service import SpeechService

__all__ = [
    "AnalysisService",
    "CatalogService",
    "ChatService",
    "DocumentService",
    "SessionService",
    "SpeechService",
]
