"""
Tests for the analysis endpoint.

System role: Verification of the /analyze HTTP contract
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from visual_rag.api.deps import get_analysis_service
from visual_rag.core.context.schemas import ExtractedContext
from visual_rag.core.exceptions import ConfigurationError, ValidationError
from visual_rag.models.analysis import AnalyzeRequest, AnalyzeResponse


@pytest.fixture
def analysis_service(app) -> MagicMock:
    service = MagicMock()
    service.analyze = AsyncMock()
    app.dependency_overrides[get_analysis_service] = lambda: service
    return service


def _response(**overrides) -> AnalyzeResponse:
    values = {
        "response": "Check the fuse.",
        "response_status": "ok",
        "extracted_context": ExtractedContext(primary_category="electrical"),
        "context_source": "model",
        "retrieved_documents": [],
        "match_count": 0,
        "processing_time_ms": 12,
        "session_id": "session_1_abc",
    }
    values.update(overrides)
    return AnalyzeResponse(**values)


class TestAnalyzeEndpoint:
    """Test suite for POST /api/v1/analyze."""

    def test_returns_camel_case_envelope(self, client, analysis_service, png_base64):
        # Arrange
        analysis_service.analyze.return_value = _response()

        # Act
        response = client.post(
            "/api/v1/analyze",
            json={"imageBase64": png_base64, "mimeType": "image/png", "userText": "red light", "sessionId": "s1"},
        )

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["matchCount"] == 0
        assert data["responseStatus"] == "ok"
        assert data["extractedContext"]["primaryCategory"] == "electrical"

        request = analysis_service.analyze.await_args.args[0]
        assert isinstance(request, AnalyzeRequest)
        assert request.user_text == "red light"
        assert request.session_id == "s1"

    def test_blocked_response_is_success(self, client, analysis_service, png_base64):
        analysis_service.analyze.return_value = _response(response="Blocked.", response_status="blocked")

        response = client.post("/api/v1/analyze", json={"imageBase64": png_base64})

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["responseStatus"] == "blocked"

    def test_missing_image_is_request_validation_error(self, client, analysis_service):
        response = client.post("/api/v1/analyze", json={"userText": "hello"})

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert "imageBase64" in data["error"]
        analysis_service.analyze.assert_not_called()

    def test_service_validation_error(self, client, analysis_service):
        analysis_service.analyze.side_effect = ValidationError("Unsupported image type: image/gif", field="mimeType")

        response = client.post("/api/v1/analyze", json={"imageBase64": "R0lG", "mimeType": "image/gif"})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Unsupported image type: image/gif",
            "details": {"field": "mimeType"},
        }

    def test_configuration_error(self, client, analysis_service, png_base64):
        analysis_service.analyze.side_effect = ConfigurationError(
            "GEMINI_API_KEY is not configured", setting="GEMINI_API_KEY"
        )

        response = client.post("/api/v1/analyze", json={"imageBase64": png_base64})

        assert response.status_code == 500
        assert response.json()["error"] == "GEMINI_API_KEY is not configured"
