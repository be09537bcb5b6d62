"""
Test suite for DocumentService.

CRUD singletons are patched; the embedder and indicator extractor are
mocks. Validation failures must happen before any external call.

System role: Verification of document registration and management
"""

import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from visual_rag.application.services.document_service import DocumentService, validate_fields
from visual_rag.core.exceptions import (
    DocumentNotFoundError,
    EmbeddingFailedError,
    StoreError,
    ValidationError,
)
from visual_rag.core.tagging import IndicatorMetadata
from visual_rag.models.document import DocumentCreateRequest, DocumentUpdateRequest


def _row(**values) -> SimpleNamespace:
    """Stand-in for a RagDocumentModel row as returned by the CRUD layer."""
    defaults = {
        "id": uuid.uuid4(),
        "title": "Title",
        "content": "Step 1: do the thing",
        "icon_name": None,
        "icon_description": None,
        "category": "general",
        "subcategory": None,
        "issue_type": "visual_indicator",
        "severity_level": "medium",
        "urgency_level": "normal",
        "difficulty_level": "intermediate",
        "estimated_time_minutes": 15,
        "tools_required": [],
        "safety_warnings": [],
        "visual_indicators": [],
        "indicator_states": [],
        "tags": [],
        "image_embedding": None,
        "is_active": True,
        "source": "manual",
        "document_metadata": {},
        "created_at": datetime.now(timezone.utc),
    }
    defaults.update(values)
    return SimpleNamespace(**defaults)


@pytest.fixture
def crud():
    with patch("visual_rag.application.services.document_service.rag_document_crud") as crud:
        crud.create = AsyncMock(side_effect=lambda db, **values: _row(**values))
        crud.update_by_id = AsyncMock(side_effect=lambda db, id, **values: _row(id=id, **values))
        crud.soft_delete = AsyncMock(return_value=True)
        crud.delete_by_id = AsyncMock(return_value=True)
        crud.list_active = AsyncMock(return_value=[])
        yield crud


@pytest.fixture
def embedder() -> MagicMock:
    embedder = MagicMock()
    embedder.embed = AsyncMock(return_value=[0.5] * 8)
    return embedder


@pytest.fixture
def indicator_extractor() -> MagicMock:
    extractor = MagicMock()
    extractor.extract = AsyncMock(return_value=IndicatorMetadata())
    return extractor


@pytest.fixture
def service(mock_db, embedder, indicator_extractor) -> DocumentService:
    return DocumentService(db=mock_db, embedder=embedder, indicator_extractor=indicator_extractor)


def _request(**values) -> DocumentCreateRequest:
    defaults = {
        "title": "Red power light blinking",
        "content": "Step 1: unplug the device. Step 2: wait 30 seconds.",
        "icon_name": "power_led",
        "icon_description": "Red LED next to the power button",
    }
    defaults.update(values)
    return DocumentCreateRequest(**defaults)


class TestValidateFields:
    """Test suite for validate_fields()."""

    def test_missing_title_and_content(self) -> None:
        errors, _ = validate_fields("", "   ")

        assert errors == ["Title is required", "Troubleshooting content is required"]

    def test_limits(self) -> None:
        errors, _ = validate_fields("t" * 201, "c" * 10001, "i" * 201, "d" * 1001, 481)

        assert len(errors) == 5

    def test_warnings(self) -> None:
        errors, warnings = validate_fields("ab", "short", icon_description="tiny")

        assert errors == []
        assert len(warnings) == 4

    def test_partial_skips_missing_fields(self) -> None:
        errors, _ = validate_fields(None, None, partial=True)

        assert errors == []


class TestRegister:
    """Test suite for DocumentService.register()."""

    @pytest.mark.asyncio
    async def test_empty_title_fails_before_external_calls(
        self, service, crud, embedder, indicator_extractor, png_base64
    ) -> None:
        # Arrange
        request = _request(title="", image_base64=png_base64, mime_type="image/png")

        # Act
        with pytest.raises(ValidationError) as exc_info:
            await service.register(request)

        # Assert
        assert "required" in exc_info.value.message
        embedder.embed.assert_not_called()
        indicator_extractor.extract.assert_not_called()
        crud.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unsupported_image_fails_before_external_calls(
        self, service, crud, embedder, png_base64
    ) -> None:
        with pytest.raises(ValidationError):
            await service.register(_request(image_base64=png_base64, mime_type="image/gif"))

        embedder.embed.assert_not_called()
        crud.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_registers_with_embedding_and_suggested_tags(
        self, service, crud, embedder, png_base64, png_bytes
    ) -> None:
        # Act
        document, warnings, suggested = await service.register(
            _request(image_base64=png_base64, mime_type="image/png", category=" Electrical ")
        )

        # Assert
        embedder.embed.assert_awaited_once_with(png_bytes, "image/png")
        values = crud.create.await_args.kwargs
        assert values["image_embedding"] == [0.5] * 8
        assert values["category"] == "electrical"
        assert document.has_embedding is True
        assert "led" in suggested and "red" in suggested
        assert values["tags"] == suggested
        assert warnings == []

    @pytest.mark.asyncio
    async def test_ai_tags_replace_suggested_tags(self, service, crud, indicator_extractor) -> None:
        # Arrange
        indicator_extractor.extract.return_value = IndicatorMetadata(
            visual_indicators=["led_light"], indicator_states=["blinking"], tags=["power"]
        )

        # Act
        document, _, suggested = await service.register(_request(tags=["manual-tag"]))

        # Assert
        assert document.tags == ["manual-tag", "power"]
        assert document.visual_indicators == ["led_light"]
        assert document.indicator_states == ["blinking"]
        assert suggested

    @pytest.mark.asyncio
    async def test_tags_are_stored_lowercase(self, service, crud, indicator_extractor) -> None:
        indicator_extractor.extract.return_value = IndicatorMetadata(tags=["WARNING", "Safety"])

        await service.register(_request(tags=["Safety", "Power"]))

        assert crud.create.await_args.kwargs["tags"] == ["safety", "power", "warning"]

    @pytest.mark.asyncio
    async def test_auto_extract_disabled(self, service, indicator_extractor) -> None:
        await service.register(_request(auto_extract=False))

        indicator_extractor.extract.assert_not_called()

    @pytest.mark.asyncio
    async def test_embedding_failure_propagates(self, service, crud, embedder, png_base64) -> None:
        embedder.embed.side_effect = EmbeddingFailedError("failed", attempts=3)

        with pytest.raises(EmbeddingFailedError):
            await service.register(_request(image_base64=png_base64, mime_type="image/png"))

        crud.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_database_error_is_store_error(self, service, crud) -> None:
        crud.create.side_effect = OperationalError("INSERT", {}, Exception("connection refused"))

        with pytest.raises(StoreError):
            await service.register(_request())


class TestRegisterBatch:
    """Test suite for DocumentService.register_batch()."""

    @pytest.mark.asyncio
    async def test_per_entry_results(self, service, crud, mock_db) -> None:
        # Act
        results = await service.register_batch([_request(title="First"), _request(title=""), _request(title="Third")])

        # Assert
        assert [r.success for r in results] == [True, False, True]
        assert "required" in results[1].error
        assert results[2].title == "Third"
        assert mock_db.begin_nested.call_count == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [0, 51])
    async def test_batch_size_limits(self, service, count) -> None:
        with pytest.raises(ValidationError):
            await service.register_batch([_request() for _ in range(count)])


class TestUpdateDeleteList:
    """Test suite for update(), delete() and list_documents()."""

    @pytest.mark.asyncio
    async def test_update_applies_given_fields(self, service, crud) -> None:
        doc_id = str(uuid.uuid4())

        document = await service.update(doc_id, DocumentUpdateRequest(title="New title", is_active=False))

        values = crud.update_by_id.await_args.kwargs
        assert values == {"title": "New title", "is_active": False}
        assert document.id == doc_id

    @pytest.mark.asyncio
    async def test_update_lowercases_tags(self, service, crud) -> None:
        await service.update(str(uuid.uuid4()), DocumentUpdateRequest(tags=["Urgent", "urgent", "LED"]))

        assert crud.update_by_id.await_args.kwargs["tags"] == ["urgent", "led"]

    @pytest.mark.asyncio
    async def test_update_reembeds_new_image(self, service, crud, embedder, png_base64) -> None:
        await service.update(str(uuid.uuid4()), DocumentUpdateRequest(image_base64=png_base64, mime_type="image/png"))

        embedder.embed.assert_awaited_once()
        assert crud.update_by_id.await_args.kwargs["image_embedding"] == [0.5] * 8

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, service, crud) -> None:
        crud.update_by_id.side_effect = None
        crud.update_by_id.return_value = None

        with pytest.raises(DocumentNotFoundError):
            await service.update(str(uuid.uuid4()), DocumentUpdateRequest(title="x" * 5))

    @pytest.mark.asyncio
    async def test_update_invalid_id(self, service) -> None:
        with pytest.raises(DocumentNotFoundError):
            await service.update("not-a-uuid", DocumentUpdateRequest(title="Title"))

    @pytest.mark.asyncio
    async def test_update_rejects_empty_title(self, service, crud) -> None:
        with pytest.raises(ValidationError):
            await service.update(str(uuid.uuid4()), DocumentUpdateRequest(title=""))

        crud.update_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_soft_delete_by_default(self, service, crud) -> None:
        await service.delete(str(uuid.uuid4()))

        crud.soft_delete.assert_awaited_once()
        crud.delete_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_hard_delete_missing_document(self, service, crud) -> None:
        crud.delete_by_id.return_value = False

        with pytest.raises(DocumentNotFoundError):
            await service.delete(str(uuid.uuid4()), hard=True)

    @pytest.mark.asyncio
    async def test_list_documents(self, service, crud) -> None:
        crud.list_active.return_value = [_row(title="A"), _row(title="B")]

        documents = await service.list_documents(category="electrical", limit=10, offset=5)

        assert [d.title for d in documents] == ["A", "B"]
        crud.list_active.assert_awaited_once_with(service.db, category="electrical", limit=10, offset=5)
