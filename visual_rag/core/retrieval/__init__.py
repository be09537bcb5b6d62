"""
Document retrieval: three scoring strategies merged into one ranking.
"""

from visual_rag.core.retrieval.schemas import RagDocument, RetrievalResult
from visual_rag.core.retrieval.scoring import ScoreComponent, merge_components
from visual_rag.core.retrieval.retriever import DocumentRetriever, DocumentStore

__all__ = [
    "RagDocument",
    "RetrievalResult",
    "ScoreComponent",
    "merge_components",
    "DocumentRetriever",
    "DocumentStore",
]
