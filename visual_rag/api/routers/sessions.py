"""
Session API endpoints.

Routes:
- GET /sessions - List sessions
- GET /sessions/{id} - Get a session (session=null when unknown)
- PUT /sessions/{id} - Replace a session's turns
- DELETE /sessions/{id} - Delete a session

Dependencies: visual_rag.application.services.session_service, visual_rag.models
System role: Session management HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from visual_rag.api.deps import get_session_service
from visual_rag.application.services.session_service import SessionService
from visual_rag.models.session import (
    SessionDeleteResponse,
    SessionListResponse,
    SessionPutRequest,
    SessionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=SessionListResponse)
async def list_sessions(
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    session_service: SessionService = Depends(get_session_service),
) -> SessionListResponse:
    sessions = await session_service.list_sessions(limit=limit, offset=offset)
    return SessionListResponse(sessions=sessions)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: str,
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    return SessionResponse(session=await session_service.get_session(session_id))


@router.put("/{session_id}", response_model=SessionResponse)
async def put_session(
    session_id: str,
    request: SessionPutRequest,
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """
    Create or replace a session's turns.

    Args:
        session_id: Caller-chosen session key
        request: Full ordered turn list

    Returns:
        SessionResponse: Stored session
    """
    session = await session_service.put_session(session_id, request.turns)
    return SessionResponse(session=session)


@router.delete("/{session_id}", response_model=SessionDeleteResponse)
async def delete_session(
    session_id: str,
    session_service: SessionService = Depends(get_session_service),
) -> SessionDeleteResponse:
    """
    Delete session by key.

    Raises:
        SessionNotFoundError(404): Unknown key
    """
    await session_service.delete_session(session_id)
    return SessionDeleteResponse(session_id=session_id)
