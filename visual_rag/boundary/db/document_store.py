"""
SQL document store.

Implements the retriever's DocumentStore protocol on top of
RagDocumentCRUD. Each query runs inside a SAVEPOINT so a failing strategy
does not abort the request transaction for the strategies that follow.

Dependencies: sqlalchemy, visual_rag.boundary.db.CRUD
System role: Adapter between the retriever and Postgres/pgvector
"""

from sqlalchemy.ext.asyncio import AsyncSession

from visual_rag.boundary.db.CRUD.rag_document_crud import rag_document_crud
from visual_rag.boundary.db.models.rag_document_model import RagDocumentModel
from visual_rag.core.retrieval.schemas import RagDocument


def to_rag_document(row: RagDocumentModel) -> RagDocument:
    """Convert an ORM row to the retrieval domain type."""
    return RagDocument(
        id=str(row.id),
        title=row.title,
        content=row.content,
        icon_name=row.icon_name,
        icon_description=row.icon_description,
        category=row.category or "general",
        subcategory=row.subcategory,
        issue_type=row.issue_type or "general",
        severity_level=row.severity_level or "medium",
        urgency_level=row.urgency_level or "normal",
        difficulty_level=row.difficulty_level or "intermediate",
        estimated_time_minutes=row.estimated_time_minutes or 15,
        tools_required=list(row.tools_required or []),
        safety_warnings=list(row.safety_warnings or []),
        visual_indicators=list(row.visual_indicators or []),
        indicator_states=list(row.indicator_states or []),
        tags=list(row.tags or []),
        is_active=row.is_active,
        source=row.source or "manual",
        metadata=dict(row.document_metadata or {}),
        has_embedding=row.image_embedding is not None,
        created_at=row.created_at,
    )


class SqlDocumentStore:
    """DocumentStore backed by the rag_documents table."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def search_similar(
        self,
        embedding: list[float],
        threshold: float,
        match_count: int,
        category: str | None = None,
    ) -> list[tuple[RagDocument, float]]:
        async with self.db.begin_nested():
            rows = await rag_document_crud.search_similar(
                self.db, embedding, threshold, match_count, category
            )
        return [(to_rag_document(row), similarity) for row, similarity in rows]

    async def find_by_categories(self, categories: list[str], limit: int) -> list[RagDocument]:
        async with self.db.begin_nested():
            rows = await rag_document_crud.get_by_categories(self.db, categories, limit)
        return [to_rag_document(row) for row in rows]

    async def search_text(self, keywords: list[str], limit: int) -> list[RagDocument]:
        async with self.db.begin_nested():
            rows = await rag_document_crud.search_text(self.db, keywords, limit)
        return [to_rag_document(row) for row in rows]

    async def find_by_tags(self, tags: list[str], limit: int) -> list[RagDocument]:
        async with self.db.begin_nested():
            rows = await rag_document_crud.get_by_tags(self.db, tags, limit)
        return [to_rag_document(row) for row in rows]
