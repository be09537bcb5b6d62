"""
Text chat schemas.

Dependencies: pydantic
System role: Follow-up chat API contract
"""

from typing import Any, Literal

from pydantic import Field

from visual_rag.models.common import CamelModel, SuccessEnvelope


class ChatRequest(CamelModel):
    """Request body for POST /chat."""

    prompt: str = Field(default="", description="Follow-up question, typically transcribed speech")
    chat_history: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Prior turns, used when the session has no stored history",
    )
    session_id: str | None = Field(default=None, description="Session key; turns are appended when given")


class ChatResponse(SuccessEnvelope):
    response: str
    response_status: Literal["ok", "blocked", "empty"]
    processing_time_ms: int
    session_id: str | None = None
