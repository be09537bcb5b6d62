"""
Chat session CRUD operations.

Sessions are addressed by the caller's session key, never by the UUID
primary key.

Dependencies: sqlalchemy, visual_rag.boundary.db.models
System role: Session persistence operations
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from visual_rag.boundary.db.CRUD.base_crud import BaseCRUD
from visual_rag.boundary.db.models.chat_session_model import ChatSessionModel


class ChatSessionCRUD(BaseCRUD[ChatSessionModel]):
    def __init__(self) -> None:
        super().__init__(ChatSessionModel)

    async def get_by_key(self, session: AsyncSession, session_key: str) -> ChatSessionModel | None:
        result = await session.execute(
            select(ChatSessionModel).where(ChatSessionModel.session_key == session_key)
        )
        return result.scalar_one_or_none()

    async def upsert_turns(self, session: AsyncSession, session_key: str, turns: list[dict]) -> ChatSessionModel:
        """
        Store the full turn list of a session, creating the row on first write.

        Args:
            session: Async database session
            session_key: Caller-supplied session id
            turns: Ordered JSON-serializable turns

        Returns:
            The stored ChatSessionModel
        """
        stored = await self.get_by_key(session, session_key)
        if stored is None:
            return await self.create(session, session_key=session_key, turns=turns)

        # New list object so the plain JSON column is flagged dirty
        stored.turns = list(turns)
        await session.flush()
        await session.refresh(stored)
        return stored

    async def delete_by_key(self, session: AsyncSession, session_key: str) -> bool:
        result = await session.execute(
            delete(ChatSessionModel).where(ChatSessionModel.session_key == session_key)
        )
        return result.rowcount > 0

    async def list_recent(self, session: AsyncSession, limit: int = 50, offset: int = 0) -> list[ChatSessionModel]:
        """Most recently updated first."""
        stmt = (
            select(ChatSessionModel)
            .order_by(ChatSessionModel.updated_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return await self.fetch_all(session, stmt)


chat_session_crud = ChatSessionCRUD()
