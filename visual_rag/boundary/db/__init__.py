"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_engine(), get_async_engine(), get_async_session_factory(), get_async_db(),
    ping_database(), dispose_engine(): Connection management
  - RagDocumentModel, ChatSessionModel, AnalysisLogModel, AnalysisPromptModel, IssueCategoryModel
  - CRUD singletons for each model
  - SqlDocumentStore: Retriever store backed by rag_documents

Dependencies: sqlalchemy, pgvector, visual_rag.configs
System role: Database adapter for documents, sessions, logs and catalogs
"""

from visual_rag.boundary.db.base import Base, TimestampMixin, UUIDMixin
from visual_rag.boundary.db.connection import (
    dispose_engine,
    get_engine,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
    ping_database,
)
from visual_rag.boundary.db.models import (
    AnalysisLogModel,
    AnalysisPromptModel,
    ChatSessionModel,
    IssueCategoryModel,
    RagDocumentModel,
)
from visual_rag.boundary.db.CRUD import (
    analysis_log_crud,
    analysis_prompt_crud,
    chat_session_crud,
    issue_category_crud,
    rag_document_crud,
)
from visual_rag.boundary.db.document_store import SqlDocumentStore, to_rag_document

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "get_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "ping_database",
    "dispose_engine",
    "AnalysisLogModel",
    "AnalysisPromptModel",
    "ChatSessionModel",
    "IssueCategoryModel",
    "RagDocumentModel",
    "analysis_log_crud",
    "analysis_prompt_crud",
    "chat_session_crud",
    "issue_category_crud",
    "rag_document_crud",
    "SqlDocumentStore",
    "to_rag_document",
]
