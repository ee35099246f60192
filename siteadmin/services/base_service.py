"""Generic service base shared by the visitor, log, message and user services."""

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from siteadmin.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseService(Generic[ModelType]):
    """Row-level helpers over one mapped table.

    Every write commits immediately; the session belongs to a single request.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]):
        self.db = db
        self.model = model

    async def get_by_id(self, id: Any) -> ModelType | None:
        return await self.db.get(self.model, id)

    async def create(self, obj: ModelType) -> ModelType:
        """Insert a row and reload server-side values."""
        self.db.add(obj)
        return await self.update(obj)

    async def update(self, obj: ModelType) -> ModelType:
        """Commit pending attribute changes of a loaded row."""
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def delete_by_id(self, id: Any) -> bool:
        """Delete a row by primary key, False when it does not exist."""
        obj = await self.get_by_id(id)
        if obj is None:
            return False
        await self.db.delete(obj)
        await self.db.commit()
        return True

    async def delete_all(self) -> int:
        """Delete every row of the table."""
        result = await self.db.execute(delete(self.model))
        await self.db.commit()
        return result.rowcount or 0

    async def count(self, *filters: Any) -> int:
        """Count rows matching all given filters."""
        query = select(func.count()).select_from(self.model)
        if filters:
            query = query.where(*filters)
        result = await self.db.execute(query)
        return result.scalar() or 0

    async def paginate(self, query: Select, page: int, per_page: int) -> list[ModelType]:
        """Fetch one page (1-based) of a select query."""
        result = await self.db.execute(
            query.offset((page - 1) * per_page).limit(per_page)
        )
        return list(result.scalars().all())
