"""
Unit of Work

Groups repository access for one request around a single AsyncSession.
Nothing is persisted until save_changes() commits.
"""

from typing import Any, Type

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sitecms.database import get_db
from sitecms.repositories.base import ModelT, Repository


class UnitOfWork:
    def __init__(self, db: AsyncSession):
        self.db = db
        self._repositories: dict[type, Repository[Any]] = {}

    def repository(self, model: Type[ModelT]) -> Repository[ModelT]:
        """Return the (cached) repository for a mapped model class."""
        if model not in self._repositories:
            self._repositories[model] = Repository(model, self.db)
        return self._repositories[model]

    async def save_changes(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()


async def get_unit_of_work(db: AsyncSession = Depends(get_db)) -> UnitOfWork:
    """FastAPI dependency returning a UnitOfWork bound to the request session."""
    return UnitOfWork(db)
