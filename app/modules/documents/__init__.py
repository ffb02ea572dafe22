# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/__init__.py

Documentos enviables (facturas y ofertas):
- Carga del payload desde BD
- Render PDF determinista y adjunto
- Metadatos de envío
- Endpoint /api/pdf

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

__all__ = []
