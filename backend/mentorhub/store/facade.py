"""
Data access facade over the relational store.

Every console page reads and writes through one uniform interface
parameterized by table name:

    rows = await store.query(
        "tasks",
        filters=[Filter.neq("status", "completed")],
        order=[Order.desc("priority"), Order.asc("due_date")],
        limit=5,
        include="students",
    )

Key properties:
1. One call = one session = one transaction. Nothing is partially applied.
2. Table, field and include names are validated before any round trip.
3. Rows come back as plain dicts; an include embeds a small summary of the
   related row under the relationship name (e.g. row["student"] = {"id", "name"}).
4. Every failure surfaces as a StoreError subclass. Nothing retries.
"""

import logging
from collections.abc import AsyncIterator, Iterable, Mapping, Sequence
from contextlib import asynccontextmanager
from datetime import date
from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy import Date, Uuid, case, func, inspect as sa_inspect, select
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import joinedload

from mentorhub.db.models import RANKED_FIELDS, TABLES
from mentorhub.store.errors import (
    ConstraintViolationError,
    InvalidQueryError,
    RecordNotFoundError,
    StoreUnavailableError,
)
from mentorhub.store.query import Filter, FilterOp, Order

logger = logging.getLogger(__name__)

Row = dict[str, Any]

# (table, related table) -> (relationship attribute, summary fields embedded in the row)
EMBEDS: dict[tuple[str, str], tuple[str, tuple[str, ...]]] = {
    ("ideas", "students"): ("student", ("id", "name")),
    ("tasks", "students"): ("student", ("id", "name")),
    ("tasks", "ideas"): ("idea", ("id", "title")),
    ("receipts", "receipt_categories"): ("category", ("id", "name", "color")),
    ("research_history", "ideas"): ("idea", ("id", "title")),
}

# Server-owned columns a caller may never write
_READ_ONLY_FIELDS = frozenset({"id", "created_at", "updated_at"})


class DataStore:
    """Uniform CRUD interface against the store."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    # =========================================================================
    # READS
    # =========================================================================

    async def query(
        self,
        table: str,
        *,
        filters: Iterable[Filter] = (),
        order: Iterable[Order] = (),
        limit: int | None = None,
        include: str | Sequence[str] | None = None,
        columns: Sequence[str] | None = None,
    ) -> list[Row]:
        """Select rows from a table, optionally embedding related rows one foreign key away."""
        model = self._model(table)
        fields = self._select_fields(table, model, columns)

        stmt = select(model).where(*self._where(table, model, filters))
        for term in order:
            stmt = stmt.order_by(self._order_clause(table, model, term))
        if limit is not None:
            stmt = stmt.limit(limit)

        includes = (include,) if isinstance(include, str) else tuple(include or ())
        embeds = [self._embed(table, related) for related in includes]
        for relation, _ in embeds:
            stmt = stmt.options(joinedload(getattr(model, relation)))

        async with self._round_trip(table) as session:
            result = await session.execute(stmt)
            rows = []
            for record in result.scalars():
                row = {name: getattr(record, name) for name in fields}
                for relation, summary_fields in embeds:
                    related = getattr(record, relation)
                    row[relation] = (
                        None if related is None else {name: getattr(related, name) for name in summary_fields}
                    )
                rows.append(row)

        logger.debug("Queried %s: %d rows", table, len(rows))
        return rows

    async def count(self, table: str, *, filters: Iterable[Filter] = ()) -> int:
        """Exact row count for a table under the given filters."""
        model = self._model(table)
        stmt = select(func.count()).select_from(model).where(*self._where(table, model, filters))

        async with self._round_trip(table) as session:
            result = await session.execute(stmt)
            return int(result.scalar_one())

    # =========================================================================
    # WRITES
    # =========================================================================

    async def insert(self, table: str, record: Mapping[str, Any]) -> Row:
        """Insert one row. The store generates id and timestamps."""
        model = self._model(table)
        values = self._writable_values(table, model, record)

        async with self._round_trip(table) as session:
            obj = model(**values)
            session.add(obj)
            await session.commit()
            await session.refresh(obj)
            row = self._to_row(model, obj)

        logger.info("Inserted %s %s", table, row["id"])
        return row

    async def update(self, table: str, record_id: UUID | str, patch: Mapping[str, Any]) -> Row:
        """Apply a partial update to one row by id."""
        model = self._model(table)
        values = self._writable_values(table, model, patch)
        key = self._record_key(table, record_id)

        async with self._round_trip(table) as session:
            obj = await session.get(model, key)
            if obj is None:
                raise RecordNotFoundError(table, record_id)
            for name, value in values.items():
                setattr(obj, name, value)
            await session.commit()
            await session.refresh(obj)
            row = self._to_row(model, obj)

        logger.info("Updated %s %s (%s)", table, key, ", ".join(values) or "no fields")
        return row

    async def delete(self, table: str, record_id: UUID | str) -> None:
        """Delete one row by id. Referential actions are the store's job."""
        model = self._model(table)
        key = self._record_key(table, record_id)

        async with self._round_trip(table) as session:
            obj = await session.get(model, key)
            if obj is None:
                raise RecordNotFoundError(table, record_id)
            await session.delete(obj)
            await session.commit()

        logger.info("Deleted %s %s", table, key)

    # =========================================================================
    # HELPERS
    # =========================================================================

    @asynccontextmanager
    async def _round_trip(self, table: str) -> AsyncIterator[AsyncSession]:
        """Open a session for one call and translate driver failures into StoreErrors."""
        try:
            async with self._session_factory() as session:
                yield session
        except (IntegrityError, DataError) as e:
            logger.warning("Store rejected write to %s: %s", table, e.orig)
            raise ConstraintViolationError(str(e.orig), table=table) from e
        except (SQLAlchemyError, OSError) as e:
            logger.exception("Store round trip to %s failed", table)
            raise StoreUnavailableError(str(e), table=table) from e

    @staticmethod
    def _model(table: str) -> type:
        model = TABLES.get(table)
        if model is None:
            raise InvalidQueryError(f"Unknown table: {table}", table=table)
        return model

    @staticmethod
    def _column_names(model: type) -> list[str]:
        return [attr.key for attr in sa_inspect(model).column_attrs]

    def _to_row(self, model: type, obj: object) -> Row:
        return {name: getattr(obj, name) for name in self._column_names(model)}

    def _select_fields(self, table: str, model: type, columns: Sequence[str] | None) -> list[str]:
        known = self._column_names(model)
        if columns is None:
            return known
        unknown = [name for name in columns if name not in known]
        if unknown:
            raise InvalidQueryError(f"Unknown columns on {table}: {', '.join(unknown)}", table=table)
        return list(columns)

    def _column(self, table: str, model: type, field: str):
        if field not in self._column_names(model):
            raise InvalidQueryError(f"Unknown field on {table}: {field}", table=table)
        return getattr(model, field)

    @staticmethod
    def _embed(table: str, include: str) -> tuple[str, tuple[str, ...]]:
        embed = EMBEDS.get((table, include))
        if embed is None:
            raise InvalidQueryError(f"{table} has no foreign key to {include}", table=table)
        return embed

    def _where(self, table: str, model: type, filters: Iterable[Filter]) -> list:
        clauses = []
        for flt in filters:
            column = self._column(table, model, flt.field)
            value = self._coerce(table, column, flt.value)
            if flt.op is FilterOp.EQ:
                clauses.append(column.is_(None) if value is None else column == value)
            elif flt.op is FilterOp.NEQ:
                clauses.append(column.is_not(None) if value is None else column != value)
            else:
                raise InvalidQueryError(f"Unsupported filter operator: {flt.op}", table=table)
        return clauses

    def _order_clause(self, table: str, model: type, term: Order):
        column = self._column(table, model, term.field)
        domain = RANKED_FIELDS.get((table, term.field))
        expr = case({value: rank for rank, value in enumerate(domain)}, value=column) if domain else column
        clause = expr.asc() if term.ascending else expr.desc()
        return clause.nulls_first() if term.resolved_nulls_first else clause.nulls_last()

    def _writable_values(self, table: str, model: type, record: Mapping[str, Any]) -> dict[str, Any]:
        forbidden = _READ_ONLY_FIELDS.intersection(record)
        if forbidden:
            raise InvalidQueryError(
                f"Server-owned fields cannot be written on {table}: {', '.join(sorted(forbidden))}",
                table=table,
            )
        return {
            name: self._coerce(table, self._column(table, model, name), value)
            for name, value in record.items()
        }

    @staticmethod
    def _coerce(table: str, column, value: Any) -> Any:
        """Normalize wire-format values (UUID/date strings, enum members) to column types."""
        if value is None:
            return None
        if isinstance(value, Enum):
            value = value.value
        column_type = column.property.columns[0].type
        try:
            if isinstance(column_type, Uuid) and not isinstance(value, UUID):
                return UUID(str(value))
            if isinstance(column_type, Date) and isinstance(value, str):
                return date.fromisoformat(value)
        except ValueError as e:
            raise ConstraintViolationError(f"Invalid value for {table}.{column.key}: {value!r}", table=table) from e
        return value

    def _record_key(self, table: str, record_id: UUID | str) -> UUID:
        if isinstance(record_id, UUID):
            return record_id
        try:
            return UUID(str(record_id))
        except ValueError as e:
            raise RecordNotFoundError(table, record_id) from e
