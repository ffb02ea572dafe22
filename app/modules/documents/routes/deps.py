# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/routes/deps.py

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

from fastapi import Depends

from app.shared.database.database import get_table_gateway
from app.shared.database.table_gateway import SingleRowReader, SqlAlchemyTableGateway


async def get_document_reader(
    gateway: SqlAlchemyTableGateway = Depends(get_table_gateway),
) -> SingleRowReader:
    """Lector de documentos; los tests lo overridean con un gateway en memoria."""
    return gateway


__all__ = ["get_document_reader"]
# Fin del archivo backend/app/modules/documents/routes/deps.py
