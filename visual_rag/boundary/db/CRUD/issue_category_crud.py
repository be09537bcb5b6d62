"""
Issue category CRUD operations.

Dependencies: sqlalchemy, visual_rag.boundary.db.models
System role: Category catalog queries
"""

from sqlalchemy.ext.asyncio import AsyncSession

from visual_rag.boundary.db.CRUD.base_crud import BaseCRUD
from visual_rag.boundary.db.models.issue_category_model import IssueCategoryModel


class IssueCategoryCRUD(BaseCRUD[IssueCategoryModel]):
    def __init__(self) -> None:
        super().__init__(IssueCategoryModel)

    async def list_active(self, session: AsyncSession) -> list[IssueCategoryModel]:
        """Active categories in display order."""
        stmt = self.active().order_by(IssueCategoryModel.sort_order, IssueCategoryModel.name)
        return await self.fetch_all(session, stmt)


issue_category_crud = IssueCategoryCRUD()
