# -*- coding: utf-8 -*-
"""
backend/app/modules/invoices/__init__.py

Módulo de facturas de InvoiceDesk:
- Estados y transiciones de factura
- Bloqueo (finalización) tras el envío
- Endpoint de finalización

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

# Paquete liviano: no importes modelos aquí.
__all__ = []
# Fin del archivo
