# -*- coding: utf-8 -*-
"""
backend/app/modules/invoices/facades/__init__.py

Solo errores: InvoiceFinalizeFacade se importa desde su módulo
(invoice_finalize_facade) para no crear ciclos con services.
"""

from .errors import (
    InvoiceError,
    InvoiceNotFound,
    InvoiceAlreadyLocked,
    InvoiceLockInvalidStatus,
    InvoiceNumberImmutable,
    StatusTransitionNotAllowed,
    InvoiceStorageError,
    InvoiceLockError,
)

__all__ = [
    "InvoiceError",
    "InvoiceNotFound",
    "InvoiceAlreadyLocked",
    "InvoiceLockInvalidStatus",
    "InvoiceNumberImmutable",
    "StatusTransitionNotAllowed",
    "InvoiceStorageError",
    "InvoiceLockError",
]
