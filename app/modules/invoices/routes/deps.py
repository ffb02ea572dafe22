# -*- coding: utf-8 -*-
"""
backend/app/modules/invoices/routes/deps.py

Dependencias inyectables de facturas.

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

from fastapi import Depends

from app.shared.database.database import get_table_gateway
from app.shared.database.table_gateway import SqlAlchemyTableGateway
from app.modules.invoices.facades.invoice_finalize_facade import InvoiceFinalizeFacade


async def get_invoice_finalize_facade(
    gateway: SqlAlchemyTableGateway = Depends(get_table_gateway),
) -> InvoiceFinalizeFacade:
    """Tests pueden overridearla con una fachada sobre un gateway en memoria."""
    return InvoiceFinalizeFacade(gateway)


__all__ = ["get_invoice_finalize_facade"]
# Fin del archivo backend/app/modules/invoices/routes/deps.py
