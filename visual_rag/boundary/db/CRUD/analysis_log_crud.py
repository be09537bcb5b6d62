"""
Analysis log CRUD operations.

Dependencies: sqlalchemy, visual_rag.boundary.db.models
System role: Pipeline event persistence and aggregation
"""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from visual_rag.boundary.db.CRUD.base_crud import BaseCRUD
from visual_rag.boundary.db.models.analysis_log_model import AnalysisLogModel


class AnalysisLogCRUD(BaseCRUD[AnalysisLogModel]):
    def __init__(self) -> None:
        super().__init__(AnalysisLogModel)

    async def count_by_event_type_since(self, session: AsyncSession, since: datetime) -> dict[str, int]:
        """Events per event_type with timestamp > since."""
        return await self.count_grouped(
            session,
            AnalysisLogModel.event_type,
            AnalysisLogModel.timestamp > since,
        )


analysis_log_crud = AnalysisLogCRUD()
