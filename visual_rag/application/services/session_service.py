"""
Session service orchestrator.

Reads and writes analysis sessions keyed by the caller's session id.

Dependencies: sqlalchemy, visual_rag.boundary.db.CRUD
System role: Session use case orchestration
"""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from visual_rag.boundary.db.CRUD.chat_session_crud import chat_session_crud
from visual_rag.boundary.db.models.chat_session_model import ChatSessionModel
from visual_rag.core.exceptions import SessionNotFoundError, StoreError, ValidationError
from visual_rag.models.session import ChatTurn, SessionOut, SessionSummary

logger = logging.getLogger(__name__)


def _to_session_out(row: ChatSessionModel) -> SessionOut:
    return SessionOut(
        session_id=row.session_key,
        turns=[ChatTurn.model_validate(turn) for turn in row.turns or []],
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _check_key(session_id: str) -> str:
    key = (session_id or "").strip()
    if not key:
        raise ValidationError("Session id is required", field="sessionId")
    if len(key) > 200:
        raise ValidationError("Session id must be at most 200 characters", field="sessionId")
    return key


class SessionService:
    """Session service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize session service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def get_session(self, session_id: str) -> SessionOut | None:
        """
        Get a session by key.

        Returns:
            SessionOut, or None when the session does not exist

        Raises:
            StoreError: Database failure
        """
        key = _check_key(session_id)
        try:
            row = await chat_session_crud.get_by_key(self.db, key)
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:get_session - FAILED - {type(e).__name__}: {e}")
            raise StoreError("Database error while loading session", operation="get_session") from e
        return _to_session_out(row) if row else None

    async def put_session(self, session_id: str, turns: list[ChatTurn]) -> SessionOut:
        """Replace a session's turns, creating the session if needed."""
        key = _check_key(session_id)
        payload = [turn.model_dump(by_alias=True, mode="json") for turn in turns]
        try:
            row = await chat_session_crud.upsert_turns(self.db, key, payload)
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:put_session - FAILED - {type(e).__name__}: {e}")
            raise StoreError("Database error while saving session", operation="put_session") from e
        logger.info(f"{__name__}:put_session - Stored session_id={key} turns={len(payload)}")
        return _to_session_out(row)

    async def delete_session(self, session_id: str) -> None:
        """
        Delete a session.

        Raises:
            SessionNotFoundError: No session with this key
            StoreError: Database failure
        """
        key = _check_key(session_id)
        try:
            deleted = await chat_session_crud.delete_by_key(self.db, key)
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:delete_session - FAILED - {type(e).__name__}: {e}")
            raise StoreError("Database error while deleting session", operation="delete_session") from e
        if not deleted:
            raise SessionNotFoundError(key)
        logger.info(f"{__name__}:delete_session - Deleted session_id={key}")

    async def list_sessions(self, limit: int = 50, offset: int = 0) -> list[SessionSummary]:
        try:
            rows = await chat_session_crud.list_recent(self.db, limit=limit, offset=offset)
        except SQLAlchemyError as e:
            raise StoreError("Database error while listing sessions", operation="list_sessions") from e
        return [
            SessionSummary(session_id=row.session_key, turn_count=len(row.turns or []), updated_at=row.updated_at)
            for row in rows
        ]

    async def get_turns(self, session_id: str) -> list[dict[str, Any]]:
        """Stored turns as dicts, [] when the session does not exist."""
        try:
            async with self.db.begin_nested():
                row = await chat_session_crud.get_by_key(self.db, session_id)
        except SQLAlchemyError as e:
            raise StoreError("Database error while loading history", operation="get_turns") from e
        return list(row.turns or []) if row else []

    async def append_turns(self, session_id: str, turns: list[ChatTurn], base: list[dict[str, Any]]) -> int:
        """
        Store base + turns as the session history.

        Runs in a SAVEPOINT: a failure rolls back only the session write.

        Args:
            session_id: Session key
            turns: New turns, in order
            base: History the new turns follow

        Returns:
            int: Total stored turns

        Raises:
            StoreError: Database failure (already rolled back)
        """
        payload = list(base) + [turn.model_dump(by_alias=True, mode="json") for turn in turns]
        try:
            async with self.db.begin_nested():
                await chat_session_crud.upsert_turns(self.db, session_id, payload)
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:append_turns - FAILED - {type(e).__name__}: {e}")
            raise StoreError("Database error while saving session", operation="append_turns") from e
        return len(payload)
