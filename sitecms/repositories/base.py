"""
Generic async repository.

Soft-deleted rows never come back from these queries: the session-level
filter in sitecms.database applies to every entity with an `is_deleted` flag.
Pass ``include_deleted=True`` where a caller genuinely needs to see them.
"""

from collections.abc import Iterable, Sequence
from typing import Any, Generic, Type, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from sitecms.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """Async data access for a single mapped entity type."""

    def __init__(self, model: Type[ModelT], db: AsyncSession):
        self.model = model
        self.db = db

    def _select(self, include_deleted: bool = False) -> Select:
        stmt = select(self.model)
        if include_deleted:
            stmt = stmt.execution_options(include_deleted=True)
        return stmt

    async def get_by_id(self, id: Any) -> ModelT | None:
        """Return the row with this primary key, or None."""
        result = await self.db.execute(self._select().where(self.model.id == id))
        return result.scalars().first()

    async def find(
        self,
        *criteria: Any,
        options: Iterable[ORMOption] = (),
        order_by: Any = None,
        include_deleted: bool = False,
    ) -> Sequence[ModelT]:
        """
        Return every row matching all of the given SQL criteria.

        Rows come back in primary key order unless `order_by` is given;
        `options` takes loader options such as selectinload().
        """
        stmt = (
            self._select(include_deleted)
            .where(*criteria)
            .options(*options)
            .order_by(self.model.id if order_by is None else order_by)
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def find_first(self, *criteria: Any) -> ModelT | None:
        stmt = self._select().where(*criteria).order_by(self.model.id).limit(1)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_all(self, include_deleted: bool = False) -> Sequence[ModelT]:
        result = await self.db.execute(self._select(include_deleted).order_by(self.model.id))
        return result.scalars().all()

    async def add(self, entity: ModelT) -> ModelT:
        """Stage a new row; it is written on the next flush or save_changes()."""
        self.db.add(entity)
        return entity

    async def update(self, entity: ModelT) -> ModelT:
        """Stage changes made to an entity (re-attaching it if detached)."""
        return await self.db.merge(entity)
