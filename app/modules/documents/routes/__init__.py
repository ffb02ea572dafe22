# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/routes/__init__.py

Router de documentos (se monta bajo /api).
"""

from fastapi import APIRouter

from .pdf_routes import router as pdf_router


def get_documents_router() -> APIRouter:
    router = APIRouter()
    router.include_router(pdf_router)
    return router


__all__ = ["get_documents_router"]
