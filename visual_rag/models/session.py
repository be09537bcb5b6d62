"""
Session schemas.

Dependencies: pydantic
System role: Session API contracts
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import Field

from visual_rag.models.common import CamelModel, SuccessEnvelope


class ChatTurn(CamelModel):
    """One stored chat turn."""

    role: Literal["user", "model"]
    text: str = ""
    image_ref: str | None = Field(default=None, description="Digest reference of the analyzed image")
    metadata: dict[str, Any] | None = None
    timestamp: datetime | None = None


class SessionOut(CamelModel):
    session_id: str
    turns: list[ChatTurn]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SessionResponse(SuccessEnvelope):
    """Missing sessions are reported as session=None with success=True."""

    session: SessionOut | None = None


class SessionPutRequest(CamelModel):
    turns: list[ChatTurn]


class SessionSummary(CamelModel):
    session_id: str
    turn_count: int
    updated_at: datetime | None = None


class SessionListResponse(SuccessEnvelope):
    sessions: list[SessionSummary]


class SessionDeleteResponse(SuccessEnvelope):
    session_id: str
