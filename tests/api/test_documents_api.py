"""
Tests for document management endpoints.

System role: Verification of document registration, listing, update and delete routes
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from visual_rag.api.deps import get_document_service
from visual_rag.application.services.document_service import DocumentService
from visual_rag.core.exceptions import DocumentNotFoundError
from visual_rag.models.document import BatchEntryResult


@pytest.fixture
def document_service(app) -> MagicMock:
    service = MagicMock()
    for name in ("register", "register_batch", "list_documents", "update", "delete"):
        setattr(service, name, AsyncMock())
    app.dependency_overrides[get_document_service] = lambda: service
    return service


class TestRegisterDocument:
    """Test suite for POST /api/v1/documents."""

    def test_empty_title_is_rejected_before_any_call(self, app, client, mock_db):
        # Arrange: real service, so validation runs end to end
        embedder = MagicMock(embed=AsyncMock())
        extractor = MagicMock(extract=AsyncMock())
        app.dependency_overrides[get_document_service] = lambda: DocumentService(mock_db, embedder, extractor)

        # Act
        response = client.post("/api/v1/documents", json={"title": "", "content": "Step 1: unplug it."})

        # Assert
        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert "required" in data["error"]
        embedder.embed.assert_not_called()
        extractor.extract.assert_not_called()

    def test_returns_document_with_warnings(self, client, document_service, document_factory):
        document = document_factory(tags=["led"])
        document_service.register.return_value = (document, ["Title is very short"], ["led", "red"])

        response = client.post(
            "/api/v1/documents",
            json={"title": "LED", "content": "Step 1: check it", "severityLevel": "high"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["document"]["id"] == document.id
        assert data["warnings"] == ["Title is very short"]
        assert data["suggestedTags"] == ["led", "red"]
        request = document_service.register.await_args.args[0]
        assert request.severity_level == "high"

    def test_invalid_severity_is_request_validation_error(self, client, document_service):
        response = client.post(
            "/api/v1/documents",
            json={"title": "LED", "content": "Step 1", "severityLevel": "catastrophic"},
        )

        assert response.status_code == 400
        assert "severityLevel" in response.json()["error"]
        document_service.register.assert_not_called()


class TestBatchRegister:
    """Test suite for POST /api/v1/documents/batch."""

    def test_counts_registered_and_failed(self, client, document_service):
        # Arrange
        document_service.register_batch.return_value = [
            BatchEntryResult(index=0, success=True, document_id=str(uuid.uuid4()), title="A"),
            BatchEntryResult(index=1, success=False, title="", error="Title is required"),
        ]

        # Act
        response = client.post(
            "/api/v1/documents/batch",
            json={"entries": [{"title": "A", "content": "Step 1"}, {"title": "", "content": "x"}]},
        )

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["registered"] == 1
        assert data["failed"] == 1
        assert data["results"][1]["error"] == "Title is required"
        assert len(document_service.register_batch.await_args.args[0]) == 2


class TestListDocuments:
    """Test suite for GET /api/v1/documents."""

    def test_passes_filters(self, client, document_service, document_factory):
        document_service.list_documents.return_value = [document_factory(), document_factory()]

        response = client.get("/api/v1/documents", params={"category": "electrical", "limit": 10, "offset": 5})

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert (data["limit"], data["offset"]) == (10, 5)
        document_service.list_documents.assert_awaited_once_with(category="electrical", limit=10, offset=5)

    def test_limit_out_of_range(self, client, document_service):
        response = client.get("/api/v1/documents", params={"limit": 0})

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestUpdateAndDelete:
    """Test suite for PATCH and DELETE /api/v1/documents/{id}."""

    def test_update(self, client, document_service, document_factory):
        document = document_factory(title="Updated")
        document_service.update.return_value = document

        response = client.patch(f"/api/v1/documents/{document.id}", json={"title": "Updated"})

        assert response.status_code == 200
        assert response.json()["document"]["title"] == "Updated"
        document_id, request = document_service.update.await_args.args
        assert document_id == document.id
        assert request.model_fields_set == {"title"}

    def test_soft_delete_by_default(self, client, document_service):
        document_id = str(uuid.uuid4())

        response = client.delete(f"/api/v1/documents/{document_id}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "documentId": document_id, "hard": False}
        document_service.delete.assert_awaited_once_with(document_id, hard=False)

    def test_hard_delete(self, client, document_service):
        client.delete("/api/v1/documents/abc", params={"hard": "true"})

        document_service.delete.assert_awaited_once_with("abc", hard=True)

    def test_delete_unknown_document(self, client, document_service):
        document_service.delete.side_effect = DocumentNotFoundError("abc")

        response = client.delete("/api/v1/documents/abc")

        assert response.status_code == 404
        assert response.json()["success"] is False
