# -*- coding: utf-8 -*-
"""
backend/app/modules/invoices/services/__init__.py
"""

from .invoice_lock_service import lock_invoice_after_send, INVOICES_TABLE

__all__ = ["lock_invoice_after_send", "INVOICES_TABLE"]
