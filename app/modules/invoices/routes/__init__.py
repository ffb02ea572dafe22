# -*- coding: utf-8 -*-
"""
backend/app/modules/invoices/routes/__init__.py

Router del módulo de facturas, prefijo /invoices (montado bajo /api).
"""

from fastapi import APIRouter

from .invoice_finalize_routes import router as finalize_router


def get_invoices_router() -> APIRouter:
    router = APIRouter(
        prefix="/invoices",
        tags=["invoices"],
        responses={404: {"description": "No encontrado"}},
    )
    router.include_router(finalize_router)
    return router


__all__ = ["get_invoices_router"]
