# -*- coding: utf-8 -*-
"""
backend/app/__init__.py

Paquete principal del backend de InvoiceDesk.

Autor: InvoiceDesk
Fecha: 2025-12-20
"""
