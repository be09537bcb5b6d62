"""
Generic CRUD base.

Model-specific CRUD classes inherit the primary-key operations and build
their own queries from the shared helpers (active-row select, scalar list
fetch, grouped counts).

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import Select, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from visual_rag.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Primary-key CRUD for one model.

    Nothing here commits: get_async_db owns the request transaction and
    services group writes in savepoints where a partial failure is allowed.

    Attributes:
        model: Mapped class the queries target
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    def active(self) -> Select:
        """SELECT over rows with is_active = true."""
        return select(self.model).where(self.model.is_active.is_(True))

    async def fetch_all(self, session: AsyncSession, stmt: Select) -> list[ModelT]:
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def count_grouped(
        self,
        session: AsyncSession,
        column: InstrumentedAttribute,
        *criteria: Any,
    ) -> dict[Any, int]:
        """
        Row counts per distinct value of column.

        Args:
            session: Async database session
            column: Grouping column of self.model
            *criteria: WHERE clauses applied before grouping

        Returns:
            Mapping of column value (None for NULL) to count
        """
        stmt = select(column, func.count(self.model.id)).where(*criteria).group_by(column)
        result = await session.execute(stmt)
        return {value: count for value, count in result.all()}

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        """Add a row and flush so defaults (id, timestamps) are populated."""
        instance = self.model(**values)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def update_by_id(self, session: AsyncSession, id: UUID, **values: Any) -> ModelT | None:
        """UPDATE ... RETURNING; None when no row has this id."""
        stmt = update(self.model).where(self.model.id == id).values(**values).returning(self.model)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        result = await session.execute(delete(self.model).where(self.model.id == id))
        return result.rowcount > 0
