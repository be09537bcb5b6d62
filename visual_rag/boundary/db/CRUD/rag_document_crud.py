"""
RAG document CRUD operations.

The four retrieval queries (vector similarity, category match,
title/content text search, tag overlap) plus listing, soft delete and the
grouped counts behind the stats endpoint. Only active rows are ever
searched or counted.

Dependencies: sqlalchemy, pgvector, visual_rag.boundary.db.models
System role: Document store queries
"""

from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from visual_rag.boundary.db.CRUD.base_crud import BaseCRUD
from visual_rag.boundary.db.models.rag_document_model import RagDocumentModel

# Columns the stats endpoint may group by
COUNTABLE_COLUMNS = frozenset({"category", "issue_type", "severity_level", "difficulty_level"})


class RagDocumentCRUD(BaseCRUD[RagDocumentModel]):
    def __init__(self) -> None:
        super().__init__(RagDocumentModel)

    async def search_similar(
        self,
        session: AsyncSession,
        query_embedding: list[float],
        threshold: float,
        match_count: int,
        category: str | None = None,
    ) -> list[tuple[RagDocumentModel, float]]:
        """
        Cosine similarity search over image embeddings (pgvector <=>).

        similarity = 1 - cosine distance. Rows at or below the threshold are
        dropped; the rest come back nearest first.

        Args:
            session: Async database session
            query_embedding: Query vector of the configured width
            threshold: Minimum similarity (exclusive)
            match_count: Maximum rows returned
            category: Optional exact category filter

        Returns:
            List of (document, similarity) pairs
        """
        distance = RagDocumentModel.image_embedding.cosine_distance(query_embedding)
        similarity = (1 - distance).label("similarity")
        stmt = (
            select(RagDocumentModel, similarity)
            .where(RagDocumentModel.is_active.is_(True))
            .where(RagDocumentModel.image_embedding.is_not(None))
            .where(1 - distance > threshold)
            .order_by(distance)
            .limit(match_count)
        )
        if category:
            stmt = stmt.where(RagDocumentModel.category == category)
        result = await session.execute(stmt)
        return [(document, float(score)) for document, score in result.all()]

    async def get_by_categories(self, session: AsyncSession, categories: list[str], limit: int) -> list[RagDocumentModel]:
        if not categories:
            return []
        stmt = (
            self.active()
            .where(RagDocumentModel.category.in_(categories))
            .order_by(RagDocumentModel.created_at)
            .limit(limit)
        )
        return await self.fetch_all(session, stmt)

    async def search_text(self, session: AsyncSession, keywords: list[str], limit: int) -> list[RagDocumentModel]:
        """Case-insensitive substring match of any keyword in title or content."""
        if not keywords:
            return []
        patterns = [f"%{keyword}%" for keyword in keywords]
        matches = [RagDocumentModel.title.ilike(p) for p in patterns]
        matches += [RagDocumentModel.content.ilike(p) for p in patterns]
        stmt = self.active().where(or_(*matches)).order_by(RagDocumentModel.created_at).limit(limit)
        return await self.fetch_all(session, stmt)

    async def get_by_tags(self, session: AsyncSession, tags: list[str], limit: int) -> list[RagDocumentModel]:
        """Documents sharing at least one tag (array && overlap)."""
        if not tags:
            return []
        stmt = (
            self.active()
            .where(RagDocumentModel.tags.overlap([tag.lower() for tag in tags]))
            .order_by(RagDocumentModel.created_at)
            .limit(limit)
        )
        return await self.fetch_all(session, stmt)

    async def list_active(
        self,
        session: AsyncSession,
        category: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[RagDocumentModel]:
        """Newest first, optionally restricted to one category."""
        stmt = self.active()
        if category:
            stmt = stmt.where(RagDocumentModel.category == category)
        stmt = stmt.order_by(RagDocumentModel.created_at.desc()).offset(offset).limit(limit)
        return await self.fetch_all(session, stmt)

    async def soft_delete(self, session: AsyncSession, id: UUID) -> bool:
        """Mark a document inactive; False when the id is unknown."""
        return await self.update_by_id(session, id, is_active=False) is not None

    async def count_by(self, session: AsyncSession, column_name: str) -> dict[str | None, int]:
        """
        Active documents per value of one column.

        Raises:
            ValueError: column_name is not one of COUNTABLE_COLUMNS
        """
        if column_name not in COUNTABLE_COLUMNS:
            raise ValueError(f"Cannot group documents by {column_name!r}")
        return await self.count_grouped(
            session,
            getattr(RagDocumentModel, column_name),
            RagDocumentModel.is_active.is_(True),
        )

    async def count_active(self, session: AsyncSession) -> int:
        result = await session.execute(
            select(func.count(RagDocumentModel.id)).where(RagDocumentModel.is_active.is_(True))
        )
        return result.scalar_one()


rag_document_crud = RagDocumentCRUD()
