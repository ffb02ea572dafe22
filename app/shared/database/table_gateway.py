# -*- coding: utf-8 -*-
"""
backend/app/shared/database/table_gateway.py

Capacidades estrechas de almacenamiento por tabla (update condicional,
lectura de una fila, inserción, listado) sobre una AsyncSession.

Los servicios de dominio dependen de los Protocols, no de SQLAlchemy:
en tests se inyectan gateways en memoria con la misma forma.

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

import logging
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping, Optional, Protocol, Sequence

from sqlalchemy import Date, DateTime, Table, insert, select, update
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.base import Base
from app.shared.database.model_registry import load_models

logger = logging.getLogger(__name__)

# Códigos que los triggers levantan con RAISE EXCEPTION 'CODIGO'
_GUARD_CODE_RE = re.compile(r"\b([A-Z][A-Z0-9]*(?:_[A-Z0-9]+)+)\b")


class StorageError(Exception):
    """Fallo de almacenamiento; `code` trae el código del trigger si lo hubo."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ConditionalUpdater(Protocol):
    async def update_where(
        self, table: str, values: Mapping[str, Any], where: Mapping[str, Any]
    ) -> int:
        """Actualiza filas que cumplen `where`; devuelve filas afectadas."""
        ...


class SingleRowReader(Protocol):
    async def select_one(
        self,
        table: str,
        where: Mapping[str, Any],
        columns: Optional[Sequence[str]] = None,
    ) -> Optional[dict]:
        ...


class RowInserter(Protocol):
    async def insert_row(self, table: str, values: Mapping[str, Any]) -> dict:
        ...


class RowLister(Protocol):
    async def select_many(
        self,
        table: str,
        where: Mapping[str, Any],
        columns: Optional[Sequence[str]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[dict]:
        ...


class TableGateway(ConditionalUpdater, SingleRowReader, RowInserter, RowLister, Protocol):
    """Las cuatro capacidades juntas."""


def extract_guard_code(exc: BaseException) -> Optional[str]:
    """Extrae el código de guardia (p.ej. INVOICE_LOCKED_CONTENT) del error del driver."""
    orig = getattr(exc, "orig", exc)
    match = _GUARD_CODE_RE.search(str(orig))
    return match.group(1) if match else None


def _coerce_value(column, value: Any) -> Any:
    # ISO-8601 -> datetime/date para columnas tipadas
    if isinstance(value, str):
        if isinstance(column.type, DateTime):
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        if isinstance(column.type, Date):
            return date.fromisoformat(value)
    return value


def _to_plain(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


class SqlAlchemyTableGateway:
    """
    TableGateway sobre AsyncSession y las tablas registradas en Base.metadata.

    - Cada escritura hace commit; ante error hace rollback y levanta StorageError.
    - Las filas se devuelven como dict con fechas en ISO-8601.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        load_models()

    def _table(self, name: str) -> Table:
        table = Base.metadata.tables.get(name)
        if table is None:
            raise StorageError(f"Unknown table: {name}", code="UNKNOWN_TABLE")
        return table

    def _column(self, table: Table, name: str):
        column = table.c.get(name)
        if column is None:
            raise StorageError(f"Unknown column: {table.name}.{name}", code="UNKNOWN_COLUMN")
        return column

    def _coerce(self, table: Table, values: Mapping[str, Any]) -> dict:
        return {k: _coerce_value(self._column(table, k), v) for k, v in values.items()}

    def _conditions(self, table: Table, where: Mapping[str, Any]) -> list:
        return [self._column(table, k) == _coerce_value(self._column(table, k), v) for k, v in where.items()]

    def _row(self, row) -> dict:
        return {k: _to_plain(v) for k, v in row._mapping.items()}

    def _storage_error(self, exc: SQLAlchemyError, action: str, table: str) -> StorageError:
        code = extract_guard_code(exc) if isinstance(exc, DBAPIError) else None
        message = str(getattr(exc, "orig", exc))
        logger.warning("[Storage] %s %s falló (code=%s): %s", action, table, code, message)
        return StorageError(message, code=code)

    async def update_where(
        self, table: str, values: Mapping[str, Any], where: Mapping[str, Any]
    ) -> int:
        t = self._table(table)
        stmt = update(t).where(*self._conditions(t, where)).values(**self._coerce(t, values))
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise self._storage_error(e, "update", table) from e
        return result.rowcount or 0

    async def select_one(
        self,
        table: str,
        where: Mapping[str, Any],
        columns: Optional[Sequence[str]] = None,
    ) -> Optional[dict]:
        t = self._table(table)
        cols = [self._column(t, c) for c in columns] if columns else [t]
        stmt = select(*cols).where(*self._conditions(t, where)).limit(1)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise self._storage_error(e, "select", table) from e
        row = result.first()
        return self._row(row) if row is not None else None

    async def insert_row(self, table: str, values: Mapping[str, Any]) -> dict:
        t = self._table(table)
        stmt = insert(t).values(**self._coerce(t, values)).returning(t)
        try:
            result = await self.session.execute(stmt)
            row = result.first()
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise self._storage_error(e, "insert", table) from e
        return self._row(row)

    async def select_many(
        self,
        table: str,
        where: Mapping[str, Any],
        columns: Optional[Sequence[str]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[dict]:
        t = self._table(table)
        cols = [self._column(t, c) for c in columns] if columns else [t]
        stmt = select(*cols).where(*self._conditions(t, where))
        if order_by:
            col = self._column(t, order_by)
            stmt = stmt.order_by(col.desc() if descending else col.asc())
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise self._storage_error(e, "select", table) from e
        return [self._row(r) for r in result.all()]


__all__ = [
    "StorageError",
    "ConditionalUpdater",
    "SingleRowReader",
    "RowInserter",
    "RowLister",
    "TableGateway",
    "SqlAlchemyTableGateway",
    "extract_guard_code",
]
# Fin del archivo backend/app/shared/database/table_gateway.py
