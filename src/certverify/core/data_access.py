"""
Data Access Collaborator

Generic read-only lookups used by the verification resolver.

Each call opens its own short-lived session from the session factory, so
independent reads can run concurrently (an AsyncSession does not allow
concurrent statements). Soft-deleted rows (deleted_at set) are never
returned, and any database failure is raised as DataAccessError so callers
can tell "no rows" apart from "backend down".
"""

import logging
from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import Select, Table, UniqueConstraint, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from certverify.core.database import Base
from certverify.core.exceptions import DataAccessError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def is_unique_column(table: Table, column_name: str) -> bool:
    """
    Check whether a column is unique on its own.

    Counts primary keys, column-level unique flags, single-column unique
    constraints and single-column unique indexes (including partial ones).
    """
    column = table.columns.get(column_name)
    if column is None:
        return False
    if column.primary_key or column.unique:
        return True

    for index in table.indexes:
        if index.unique and [c.name for c in index.columns] == [column_name]:
            return True

    for constraint in table.constraints:
        if isinstance(constraint, UniqueConstraint) and [
            c.name for c in constraint.columns
        ] == [column_name]:
            return True

    return False


def exclude_deleted(model: type[ModelT], query: Select) -> Select:
    """Add the soft-delete filter when the model supports it."""
    deleted_at = getattr(model, "deleted_at", None)
    if deleted_at is not None:
        query = query.where(deleted_at.is_(None))
    return query


class DataAccess:
    """Read-only lookups against unique columns and primary keys."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get_by_unique_column(
        self,
        model: type[ModelT],
        column: str,
        value: Any,
    ) -> ModelT | None:
        """
        Fetch the single non-deleted row whose unique column equals value.

        Raises:
            ValueError: If column is not a unique column of the model
            DataAccessError: If the database read fails
        """
        if not is_unique_column(model.__table__, column):
            raise ValueError(f"{model.__tablename__}.{column} is not a unique column")

        query = select(model).where(getattr(model, column) == value)
        return await self._fetch_one(exclude_deleted(model, query))

    async def get_by_id(self, model: type[ModelT], record_id: UUID) -> ModelT | None:
        """
        Fetch a non-deleted row by primary key.

        Raises:
            DataAccessError: If the database read fails
        """
        query = select(model).where(model.id == record_id)
        return await self._fetch_one(exclude_deleted(model, query))

    async def _fetch_one(self, query: Select) -> Any:
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                return result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            # asyncpg connect failures (refused, DNS, timeout) are raw OSErrors
            logger.error(f"Database read failed: {e}")
            raise DataAccessError() from e
