# -*- coding: utf-8 -*-
"""
backend/app/modules/invoices/schemas/__init__.py
"""

from .invoice_finalize_schemas import (
    FinalizedInvoiceOut,
    InvoiceFinalizeRequest,
    to_finalized_out,
)

__all__ = ["InvoiceFinalizeRequest", "FinalizedInvoiceOut", "to_finalized_out"]
