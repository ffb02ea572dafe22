# -*- coding: utf-8 -*-
"""
backend/app/modules/invoices/models/__init__.py

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from .invoice_models import Invoice
from .invoice_payment_models import InvoicePayment

__all__ = ["Invoice", "InvoicePayment"]
