# -*- coding: utf-8 -*-
"""
backend/app/routes/__init__.py

Ensamblador principal de routers de InvoiceDesk.

- Health (/health y /api/health)
- Capa /api de master_routes.py

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

from fastapi import APIRouter

from .health_routes import router as health_router
from .master_routes import api

router = APIRouter()
router.include_router(health_router)
router.include_router(api)

__all__ = ["router"]

# Fin del archivo backend/app/routes/__init__.py
