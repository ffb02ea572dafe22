# -*- coding: utf-8 -*-
"""
backend/app/modules/sender_identities/routes/__init__.py

Routers de identidades de remitente (montados bajo /api):
- /sender-identities/*
- /test-email
- /settings/default_sender_identity
"""

from fastapi import APIRouter

from .default_sender_routes import router as default_sender_router
from .sender_identity_routes import router as identities_router
from .test_email_routes import router as test_email_router


def get_sender_identities_router() -> APIRouter:
    router = APIRouter()
    router.include_router(identities_router, prefix="/sender-identities")
    router.include_router(test_email_router)
    router.include_router(default_sender_router)
    return router


__all__ = ["get_sender_identities_router"]
