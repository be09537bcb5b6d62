"""
Analysis prompt CRUD operations.

Dependencies: sqlalchemy, visual_rag.boundary.db.models
System role: Prompt catalog queries
"""

from sqlalchemy.ext.asyncio import AsyncSession

from visual_rag.boundary.db.CRUD.base_crud import BaseCRUD
from visual_rag.boundary.db.models.analysis_prompt_model import AnalysisPromptModel


class AnalysisPromptCRUD(BaseCRUD[AnalysisPromptModel]):
    def __init__(self) -> None:
        super().__init__(AnalysisPromptModel)

    async def list_active(self, session: AsyncSession) -> list[AnalysisPromptModel]:
        """Active prompts ordered by priority (desc) then analysis focus (asc)."""
        stmt = self.active().order_by(
            AnalysisPromptModel.priority.desc(),
            AnalysisPromptModel.analysis_focus.asc(),
        )
        return await self.fetch_all(session, stmt)

    async def get_by_focus(self, session: AsyncSession, analysis_focus: str) -> AnalysisPromptModel | None:
        """Highest-priority active prompt for an analysis type."""
        stmt = (
            self.active()
            .where(AnalysisPromptModel.analysis_focus == analysis_focus)
            .order_by(AnalysisPromptModel.priority.desc())
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


analysis_prompt_crud = AnalysisPromptCRUD()
