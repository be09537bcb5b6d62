"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from visual_rag.boundary.db.CRUD import rag_document_crud, chat_session_crud

    documents = await rag_document_crud.list_active(db, category="electrical")
    stored = await chat_session_crud.get_by_key(db, session_id)
"""

from visual_rag.boundary.db.CRUD.base_crud import BaseCRUD
from visual_rag.boundary.db.CRUD.rag_document_crud import RagDocumentCRUD, rag_document_crud
from visual_rag.boundary.db.CRUD.chat_session_crud import ChatSessionCRUD, chat_session_crud
from visual_rag.boundary.db.CRUD.analysis_log_crud import AnalysisLogCRUD, analysis_log_crud
from visual_rag.boundary.db.CRUD.analysis_prompt_crud import AnalysisPromptCRUD, analysis_prompt_crud
from visual_rag.boundary.db.CRUD.issue_category_crud import IssueCategoryCRUD, issue_category_crud

__all__ = [
    "BaseCRUD",
    "RagDocumentCRUD",
    "rag_document_crud",
    "ChatSessionCRUD",
    "chat_session_crud",
    "AnalysisLogCRUD",
    "analysis_log_crud",
    "AnalysisPromptCRUD",
    "analysis_prompt_crud",
    "IssueCategoryCRUD",
    "issue_category_crud",
]
