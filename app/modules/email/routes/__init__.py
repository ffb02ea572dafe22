# -*- coding: utf-8 -*-
"""
backend/app/modules/email/routes/__init__.py

Router del módulo de email (se monta bajo /api).
"""

from fastapi import APIRouter

from .email_routes import router as email_router


def get_email_router() -> APIRouter:
    router = APIRouter()
    router.include_router(email_router)
    return router


__all__ = ["get_email_router"]
