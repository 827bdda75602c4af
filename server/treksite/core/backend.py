"""Table-oriented query/mutation client over the async SQLAlchemy engine.

Callers address data by table name, filter column/value pairs and ordering
columns, the same shape a hosted REST data API exposes. Every call runs in its
own session so a client can be shared freely between request handlers and the
query cache.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .database import Base

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """A query or mutation against the content store failed."""

    def __init__(self, message: str, table: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.table = table


class RowNotFoundError(BackendError):
    """The targeted row does not exist."""


@dataclass(frozen=True)
class Order:
    """Ordering clause: column name and direction."""

    column: str
    descending: bool = False


class TableClient:
    """Issue select/insert/update/delete calls against named tables."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    def _model(self, table: str):
        for mapper in Base.registry.mappers:
            if getattr(mapper.class_, "__tablename__", None) == table:
                return mapper.class_
        raise BackendError(f"Unknown table '{table}'", table=table)

    def _column(self, model, table: str, name: str):
        if name not in model.__table__.columns:
            raise BackendError(f"Unknown column '{name}' on table '{table}'", table=table)
        return getattr(model, name)

    async def select(
        self,
        table: str,
        *,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Sequence[Order] = (),
        limit: Optional[int] = None,
    ) -> list[Any]:
        """
        Select rows from a table.

        Args:
            table: Table name
            filters: Column equality filters, combined with AND
            order_by: Ordering clauses applied in sequence
            limit: Maximum number of rows

        Returns:
            Matching rows

        Raises:
            BackendError: If the table/columns are unknown or the query fails
        """
        model = self._model(table)
        stmt = select(model)

        for column, value in (filters or {}).items():
            stmt = stmt.where(self._column(model, table, column) == value)

        for order in order_by:
            col = self._column(model, table, order.column)
            stmt = stmt.order_by(col.desc() if order.descending else col.asc())

        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                return list(result.scalars())
        except SQLAlchemyError as e:
            logger.error(
                "Select failed",
                extra={"table": table, "error": str(e)}
            )
            raise BackendError(f"Failed to load {table}: {e.__class__.__name__}", table=table) from e

    async def insert(self, table: str, values: Mapping[str, Any]) -> Any:
        """
        Insert a row and return it as stored.

        Raises:
            BackendError: On unknown columns or constraint violations
        """
        model = self._model(table)
        for column in values:
            self._column(model, table, column)

        row = model(**values)
        try:
            async with self.session_factory() as session:
                session.add(row)
                await session.commit()
                await session.refresh(row)
        except IntegrityError as e:
            logger.warning(
                "Insert rejected by constraint",
                extra={"table": table, "error": str(e.orig)}
            )
            raise BackendError(f"Duplicate or invalid value for {table}", table=table) from e
        except SQLAlchemyError as e:
            logger.error(
                "Insert failed",
                extra={"table": table, "error": str(e)}
            )
            raise BackendError(f"Failed to create {table} row: {e.__class__.__name__}", table=table) from e

        logger.info(
            "Row inserted",
            extra={"table": table, "id": str(row.id)}
        )
        return row

    async def update(self, table: str, row_id: UUID, values: Mapping[str, Any]) -> Any:
        """
        Update a row by primary key and return the stored row.

        Raises:
            RowNotFoundError: If no row has this id
            BackendError: On unknown columns or constraint violations
        """
        model = self._model(table)
        for column in values:
            self._column(model, table, column)

        try:
            async with self.session_factory() as session:
                row = await session.get(model, row_id)
                if row is None:
                    raise RowNotFoundError(f"No {table} row with id '{row_id}'", table=table)
                for column, value in values.items():
                    setattr(row, column, value)
                await session.commit()
                await session.refresh(row)
        except IntegrityError as e:
            logger.warning(
                "Update rejected by constraint",
                extra={"table": table, "id": str(row_id), "error": str(e.orig)}
            )
            raise BackendError(f"Duplicate or invalid value for {table}", table=table) from e
        except SQLAlchemyError as e:
            logger.error(
                "Update failed",
                extra={"table": table, "id": str(row_id), "error": str(e)}
            )
            raise BackendError(f"Failed to update {table} row: {e.__class__.__name__}", table=table) from e

        return row

    async def delete(self, table: str, row_id: UUID) -> int:
        """
        Delete a row by primary key.

        Returns:
            Number of rows removed (0 when the id was already gone)
        """
        model = self._model(table)
        stmt = delete(model).where(model.id == row_id)
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(
                "Delete failed",
                extra={"table": table, "id": str(row_id), "error": str(e)}
            )
            raise BackendError(f"Failed to delete {table} row: {e.__class__.__name__}", table=table) from e

        logger.info(
            "Row deleted",
            extra={"table": table, "id": str(row_id), "rowcount": result.rowcount}
        )
        return result.rowcount
