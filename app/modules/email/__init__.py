# -*- coding: utf-8 -*-
"""
backend/app/modules/email/__init__.py

Envío de documentos por email (POST /api/email).

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

__all__ = []
