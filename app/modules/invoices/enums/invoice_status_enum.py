# -*- coding: utf-8 -*-
"""
backend/app/modules/invoices/enums/invoice_status_enum.py

Estados de una factura.

Valores: ('DRAFT', 'ISSUED', 'SENT', 'PAID', 'CANCELED')

En BD la columna es TEXT con CHECK; el trigger de bloqueo valida
las transiciones con el mismo mapa que invoice_status_transitions.py.

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from enum import StrEnum


class InvoiceStatus(StrEnum):
    DRAFT = "DRAFT"
    ISSUED = "ISSUED"
    SENT = "SENT"
    PAID = "PAID"
    CANCELED = "CANCELED"


__all__ = ["InvoiceStatus"]
# Fin del archivo backend/app/modules/invoices/enums/invoice_status_enum.py
