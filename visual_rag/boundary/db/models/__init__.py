"""
Database models package.

Exports:
  - RagDocumentModel: Troubleshooting documents with image embeddings
  - ChatSessionModel: Analysis sessions and their chat turns
  - AnalysisLogModel: Pipeline events
  - AnalysisPromptModel: Selectable analysis prompts
  - IssueCategoryModel: Defined issue categories

Dependencies: sqlalchemy, pgvector, visual_rag.boundary.db.base
System role: Database model definitions for domain entities
"""

from visual_rag.boundary.db.models.rag_document_model import RagDocumentModel
from visual_rag.boundary.db.models.chat_session_model import ChatSessionModel
from visual_rag.boundary.db.models.analysis_log_model import AnalysisLogModel
from visual_rag.boundary.db.models.analysis_prompt_model import AnalysisPromptModel
from visual_rag.boundary.db.models.issue_category_model import IssueCategoryModel

__all__ = [
    "RagDocumentModel",
    "ChatSessionModel",
    "AnalysisLogModel",
    "AnalysisPromptModel",
    "IssueCategoryModel",
]
