# -*- coding: utf-8 -*-
"""
backend/app/shared/__init__.py

Infraestructura compartida de InvoiceDesk: config, base de datos, Redis,
rate limiting, middlewares e integraciones de email.

No importa submódulos en import-time; cada módulo importa lo que usa.

Autor: InvoiceDesk
Fecha: 2025-12-20
"""
