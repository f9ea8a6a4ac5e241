"""
Cheese Catalog Backend — Cheese Repository
============================================

What:  Durable keyed storage for Cheese records.
How:   Every method opens its own AsyncSession from the injected factory,
       performs one statement (or one merge) and commits. There are no
       transactions spanning several calls.
Who:   Used by CheeseService; constructed once in create_app().

Failure mode:
    Any SQLAlchemyError is logged here with its detail and re-raised as a
    DatabaseError carrying only the error type name.
"""

import logging
from typing import List, Optional, Protocol

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cheese_api.exceptions import DatabaseError
from cheese_api.models.cheese import Cheese

logger = logging.getLogger(__name__)


class CheeseStore(Protocol):
    """The operations CheeseService needs from persistence."""

    async def save(self, cheese: Cheese) -> Cheese: ...

    async def find_by_id(self, cheese_id: int) -> Optional[Cheese]: ...

    async def find_all(self) -> List[Cheese]: ...

    async def exists_by_id(self, cheese_id: int) -> bool: ...

    async def delete_by_id(self, cheese_id: int) -> None: ...


class CheeseRepository:
    """
    SQLAlchemy-backed CheeseStore.

    Returned Cheese instances are detached from any session. They can be
    modified and handed back to save(), which merges them by primary key.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def save(self, cheese: Cheese) -> Cheese:
        """
        Insert a new record or update an existing one.

        A Cheese without an id is inserted and comes back with its new id.
        A Cheese with an id overwrites the stored row (last write wins).
        """
        try:
            async with self._session_factory() as session:
                persisted = await session.merge(cheese)
                await session.commit()
                return persisted
        except SQLAlchemyError as e:
            raise self._database_error("save", e, cheese_id=cheese.id) from e

    async def find_by_id(self, cheese_id: int) -> Optional[Cheese]:
        try:
            async with self._session_factory() as session:
                return await session.get(Cheese, cheese_id)
        except SQLAlchemyError as e:
            raise self._database_error("find_by_id", e, cheese_id=cheese_id) from e

    async def find_all(self) -> List[Cheese]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(Cheese).order_by(Cheese.id))
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._database_error("find_all", e) from e

    async def exists_by_id(self, cheese_id: int) -> bool:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(exists().where(Cheese.id == cheese_id))
                )
                return bool(result.scalar())
        except SQLAlchemyError as e:
            raise self._database_error("exists_by_id", e, cheese_id=cheese_id) from e

    async def delete_by_id(self, cheese_id: int) -> None:
        try:
            async with self._session_factory() as session:
                await session.execute(delete(Cheese).where(Cheese.id == cheese_id))
                await session.commit()
        except SQLAlchemyError as e:
            raise self._database_error("delete_by_id", e, cheese_id=cheese_id) from e

    @staticmethod
    def _database_error(
        operation: str,
        error: SQLAlchemyError,
        cheese_id: Optional[int] = None,
    ) -> DatabaseError:
        logger.error(
            "Database error in %s (cheese_id=%s): %s",
            operation,
            cheese_id,
            str(error),
            exc_info=True,
        )
        return DatabaseError(
            context={
                "operation": operation,
                "cheese_id": cheese_id,
                "error_type": type(error).__name__,
            },
        )
