# -*- coding: utf-8 -*-
"""
backend/app/modules/sender_identities/__init__.py

Identidades de remitente: direcciones propias del usuario que, una vez
verificadas por email, aparecen como Reply-To de sus envíos.

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

__all__ = []
