"""
Tests for session endpoints.

System role: Verification of session get/put/delete/list routes
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from visual_rag.api.deps import get_session_service
from visual_rag.core.exceptions import SessionNotFoundError, ValidationError
from visual_rag.models.session import ChatTurn, SessionOut, SessionSummary


@pytest.fixture
def session_service(app) -> MagicMock:
    service = MagicMock()
    for name in ("get_session", "put_session", "delete_session", "list_sessions"):
        setattr(service, name, AsyncMock())
    app.dependency_overrides[get_session_service] = lambda: service
    return service


def test_get_missing_session_returns_null(client, session_service):
    session_service.get_session.return_value = None

    response = client.get("/api/v1/sessions/unknown")

    assert response.status_code == 200
    assert response.json() == {"success": True, "session": None}


def test_get_session(client, session_service):
    session_service.get_session.return_value = SessionOut(
        session_id="s1",
        turns=[ChatTurn(role="user", text="hi", image_ref="sha256:1")],
    )

    response = client.get("/api/v1/sessions/s1")

    turns = response.json()["session"]["turns"]
    assert turns[0]["imageRef"] == "sha256:1"


def test_put_session(client, session_service):
    # Arrange
    now = datetime.now(timezone.utc)
    session_service.put_session.side_effect = lambda key, turns: SessionOut(
        session_id=key, turns=turns, created_at=now, updated_at=now
    )

    # Act
    response = client.put(
        "/api/v1/sessions/s1",
        json={"turns": [{"role": "user", "text": "a"}, {"role": "model", "text": "b"}]},
    )

    # Assert
    assert response.status_code == 200
    assert [t["role"] for t in response.json()["session"]["turns"]] == ["user", "model"]
    key, turns = session_service.put_session.call_args.args
    assert key == "s1"
    assert all(isinstance(t, ChatTurn) for t in turns)


def test_put_session_rejects_unknown_role(client, session_service):
    response = client.put("/api/v1/sessions/s1", json={"turns": [{"role": "system", "text": "x"}]})

    assert response.status_code == 400
    session_service.put_session.assert_not_called()


def test_delete_session(client, session_service):
    response = client.delete("/api/v1/sessions/s1")

    assert response.status_code == 200
    assert response.json() == {"success": True, "sessionId": "s1"}


def test_delete_missing_session(client, session_service):
    session_service.delete_session.side_effect = SessionNotFoundError("s1")

    response = client.delete("/api/v1/sessions/s1")

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_blank_key(client, session_service):
    session_service.get_session.side_effect = ValidationError("Session id is required", field="sessionId")

    response = client.get("/api/v1/sessions/%20")

    assert response.status_code == 400


def test_list_sessions(client, session_service):
    session_service.list_sessions.return_value = [SessionSummary(session_id="a", turn_count=4)]

    response = client.get("/api/v1/sessions", params={"limit": 5})

    assert response.json()["sessions"] == [{"sessionId": "a", "turnCount": 4, "updatedAt": None}]
    session_service.list_sessions.assert_awaited_once_with(limit=5, offset=0)


def test_unexpected_error_is_json_envelope(app, session_service):
    # Arrange
    session_service.get_session.side_effect = OSError("connection refused")
    client = TestClient(app, raise_server_exceptions=False)

    # Act
    response = client.get("/api/v1/sessions/abc")

    # Assert
    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == {"success": False, "error": "Internal server error", "details": None}
