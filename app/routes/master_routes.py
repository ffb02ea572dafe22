# -*- coding: utf-8 -*-
"""
backend/app/routes/master_routes.py

Router maestro: todos los módulos se montan bajo /api.

- /api/email                          (email)
- /api/invoices/{invoice_id}/finalize (invoices)
- /api/pdf                            (documents)
- /api/pdf/link, /api/pdf/download     (documents)
- /api/sender-identities/*, /api/test-email (sender_identities)
- /api/settings/default_sender_identity (sender_identities)

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

import logging

from fastapi import APIRouter

from app.modules.documents.routes import get_documents_router
from app.modules.email.routes import get_email_router
from app.modules.invoices.routes import get_invoices_router
from app.modules.sender_identities.routes import get_sender_identities_router

logger = logging.getLogger(__name__)

api = APIRouter(prefix="/api")

_loaded: list[str] = []


def _include(target: APIRouter, router: APIRouter, name: str) -> None:
    """Incluye un router en la capa dada y lo deja registrado en logs."""
    target.include_router(router)
    _loaded.append(f"{target.prefix or '/'}:{name}")
    logger.debug(
        "Router '%s' montado en prefix '%s' (router.prefix='%s')",
        name,
        target.prefix or "/",
        getattr(router, "prefix", ""),
    )


def loaded_routers() -> list[str]:
    return list(_loaded)


_include(api, get_email_router(), "email")
_include(api, get_invoices_router(), "invoices")
_include(api, get_documents_router(), "documents")
_include(api, get_sender_identities_router(), "sender_identities")


__all__ = ["api", "loaded_routers"]

# Fin del archivo backend/app/routes/master_routes.py
