# -*- coding: utf-8 -*-
"""
backend/app/modules/invoices/enums/__init__.py

Export central de enums del módulo de facturas.

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from .invoice_status_enum import InvoiceStatus
from .invoice_status_transitions import (
    VALID_STATUS_TRANSITIONS,
    LOCKABLE_STATUSES,
    is_valid_status_transition,
    get_allowed_transitions,
    is_lockable_status,
)

__all__ = [
    "InvoiceStatus",
    "VALID_STATUS_TRANSITIONS",
    "LOCKABLE_STATUSES",
    "is_valid_status_transition",
    "get_allowed_transitions",
    "is_lockable_status",
]
