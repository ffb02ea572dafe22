# -*- coding: utf-8 -*-
"""
backend/app/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.

Autor: InvoiceDesk
Fecha: 2025-12-20
"""

from .base import Base, NAMING_CONVENTION
from .table_gateway import (
    StorageError,
    ConditionalUpdater,
    SingleRowReader,
    RowInserter,
    RowLister,
    TableGateway,
    SqlAlchemyTableGateway,
)

__all__ = [
    "Base",
    "NAMING_CONVENTION",
    "StorageError",
    "ConditionalUpdater",
    "SingleRowReader",
    "RowInserter",
    "RowLister",
    "TableGateway",
    "SqlAlchemyTableGateway",
]
