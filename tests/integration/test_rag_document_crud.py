"""
Test suite for RagDocumentCRUD queries.

System role: Verification of the document store SQL (similarity, category,
text and tag searches, listing, soft delete and grouped counts)
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import AsyncSession

from visual_rag.boundary.db.CRUD.rag_document_crud import rag_document_crud


def executed_sql(session: AsyncMock) -> str:
    statement = session.execute.call_args.args[0]
    return str(statement.compile(dialect=postgresql.dialect()))


def _scalars(rows: list) -> MagicMock:
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    return result


@pytest.fixture
def mock_session() -> AsyncSession:
    return AsyncMock(spec=AsyncSession)


class TestSearchSimilar:
    """Test suite for RagDocumentCRUD.search_similar()."""

    @pytest.mark.asyncio
    async def test_returns_rows_with_float_similarity(self, mock_session) -> None:
        # Arrange
        row = MagicMock()
        result = MagicMock()
        result.all.return_value = [(row, 0.91)]
        mock_session.execute = AsyncMock(return_value=result)

        # Act
        matches = await rag_document_crud.search_similar(mock_session, [0.1] * 8, 0.5, 3)

        # Assert
        assert matches == [(row, 0.91)]
        sql = executed_sql(mock_session)
        assert "<=>" in sql
        assert "rag_documents.is_active IS true" in sql
        assert "rag_documents.image_embedding IS NOT NULL" in sql
        assert "LIMIT" in sql
        assert "rag_documents.category =" not in sql

    @pytest.mark.asyncio
    async def test_category_filter(self, mock_session) -> None:
        result = MagicMock()
        result.all.return_value = []
        mock_session.execute = AsyncMock(return_value=result)

        await rag_document_crud.search_similar(mock_session, [0.0] * 8, 0.5, 3, category="electrical")

        assert "rag_documents.category =" in executed_sql(mock_session)


class TestCandidateQueries:
    """Test suite for the keyword/category candidate queries."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["get_by_categories", "search_text", "get_by_tags"])
    async def test_empty_input_skips_query(self, mock_session, method) -> None:
        result = await getattr(rag_document_crud, method)(mock_session, [], 10)

        assert result == []
        mock_session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_search_text_matches_title_and_content(self, mock_session) -> None:
        mock_session.execute = AsyncMock(return_value=_scalars([]))

        await rag_document_crud.search_text(mock_session, ["fuse", "led"], 10)

        sql = executed_sql(mock_session)
        assert sql.count("ILIKE") == 4
        assert "rag_documents.title" in sql
        assert "rag_documents.content" in sql

    @pytest.mark.asyncio
    async def test_get_by_tags_uses_array_overlap(self, mock_session) -> None:
        mock_session.execute = AsyncMock(return_value=_scalars([]))

        await rag_document_crud.get_by_tags(mock_session, ["safety"], 10)

        assert "&&" in executed_sql(mock_session)

    @pytest.mark.asyncio
    async def test_get_by_tags_matches_lowercased_tags(self, mock_session) -> None:
        mock_session.execute = AsyncMock(return_value=_scalars([]))

        await rag_document_crud.get_by_tags(mock_session, ["Safety", "WARNING"], 10)

        statement = mock_session.execute.call_args.args[0]
        params = statement.compile(dialect=postgresql.dialect()).params
        assert ["safety", "warning"] in params.values()

    @pytest.mark.asyncio
    async def test_get_by_categories(self, mock_session) -> None:
        rows = [MagicMock()]
        mock_session.execute = AsyncMock(return_value=_scalars(rows))

        result = await rag_document_crud.get_by_categories(mock_session, ["electrical", "safety"], 10)

        assert result == rows
        assert "rag_documents.category IN" in executed_sql(mock_session)


class TestListingAndCounts:
    """Test suite for list_active(), soft_delete() and the count helpers."""

    @pytest.mark.asyncio
    async def test_list_active_newest_first(self, mock_session) -> None:
        mock_session.execute = AsyncMock(return_value=_scalars([]))

        await rag_document_crud.list_active(mock_session, category="hvac", limit=5, offset=10)

        sql = executed_sql(mock_session)
        assert "ORDER BY rag_documents.created_at DESC" in sql
        assert "rag_documents.category =" in sql

    @pytest.mark.asyncio
    async def test_soft_delete_marks_inactive(self, mock_session) -> None:
        # Arrange
        result = MagicMock()
        result.scalar_one_or_none.return_value = MagicMock()
        mock_session.execute = AsyncMock(return_value=result)

        # Act
        deleted = await rag_document_crud.soft_delete(mock_session, uuid.uuid4())

        # Assert
        assert deleted is True
        statement = mock_session.execute.call_args.args[0]
        assert statement.compile(dialect=postgresql.dialect()).params["is_active"] is False

    @pytest.mark.asyncio
    async def test_soft_delete_unknown_id(self, mock_session) -> None:
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_session.execute = AsyncMock(return_value=result)

        assert await rag_document_crud.soft_delete(mock_session, uuid.uuid4()) is False

    @pytest.mark.asyncio
    async def test_count_by_groups_active_rows(self, mock_session) -> None:
        result = MagicMock()
        result.all.return_value = [("electrical", 3), (None, 1)]
        mock_session.execute = AsyncMock(return_value=result)

        counts = await rag_document_crud.count_by(mock_session, "category")

        assert counts == {"electrical": 3, None: 1}
        assert "GROUP BY rag_documents.category" in executed_sql(mock_session)

    @pytest.mark.asyncio
    async def test_count_active(self, mock_session) -> None:
        result = MagicMock()
        result.scalar_one.return_value = 7
        mock_session.execute = AsyncMock(return_value=result)

        assert await rag_document_crud.count_active(mock_session) == 7


@pytest.mark.asyncio
async def test_count_by_rejects_unknown_column(mock_session) -> None:
    with pytest.raises(ValueError):
        await rag_document_crud.count_by(mock_session, "title")

    mock_session.execute.assert_not_called()
