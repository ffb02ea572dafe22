# -*- coding: utf-8 -*-
"""
backend/app/modules/email/routes/email_routes.py

POST /api/email: envía una factura u oferta con su PDF.

Orden de chequeos en la ruta (el Payload Guard ya corrió como middleware):
1. Rate limit por IP (si EMAIL_RATE_KEY_SCOPE incluye ip)
2. Autenticación → 401 NOT_AUTHENTICATED
3. Rate limit por usuario (si incluye user)
4. JSON → 400 invalid_json
5. Validación y envío (DocumentEmailService)

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request

from app.shared.config import settings
from app.shared.database.table_gateway import StorageError
from app.shared.http_utils.request_meta import get_client_ip
from app.shared.security import check_rate_limit
from app.shared.utils.api_errors import ApiError, api_error_from_domain, not_authenticated
from app.modules.auth.dependencies import get_optional_user_id
from app.modules.documents.services import DocumentError
from app.modules.email.routes.deps import get_document_email_service
from app.modules.email.services import EmailError
from app.modules.email.services.email_send_service import (
    DocumentEmailService,
    parse_email_body,
    validate_email_request,
)
from app.modules.invoices.facades import InvoiceError, InvoiceLockError
from app.modules.invoices.facades.invoice_finalize_facade import translate_lock_error
from app.modules.sender_identities.services import SenderIdentityError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["email"])

SEND_ERRORS = (DocumentError, EmailError, SenderIdentityError, InvoiceError)


def send_error_to_api(exc: Exception) -> ApiError:
    """Excepción del flujo de envío → envelope HTTP."""
    if isinstance(exc, InvoiceLockError):
        exc = translate_lock_error(exc)
    elif isinstance(exc, StorageError):
        return ApiError(500, "STORAGE_ERROR", exc.message)
    return api_error_from_domain(exc)


async def enforce_email_rate_limits(request: Request, user_id: Optional[str], endpoint: str = "email") -> None:
    """IP antes de autenticar, usuario después; según EMAIL_RATE_KEY_SCOPE."""
    scopes = settings.rate_key_scopes()
    limit = settings.email_rate_limit
    window_ms = settings.email_rate_window_ms

    if "ip" in scopes:
        await check_rate_limit(endpoint, "ip", get_client_ip(request), limit, window_ms)
    if not user_id:
        raise not_authenticated()
    if "user" in scopes:
        await check_rate_limit(endpoint, "user", user_id, limit, window_ms)


@router.post("/email", summary="Enviar factura u oferta por email")
async def send_document_email(
    request: Request,
    user_id: Optional[str] = Depends(get_optional_user_id),
    service: DocumentEmailService = Depends(get_document_email_service),
):
    await enforce_email_rate_limits(request, user_id)

    try:
        body = parse_email_body(await request.body())
        command = validate_email_request(body)
        result = await service.send_document(user_id, command, body)
    except (*SEND_ERRORS, StorageError) as e:
        raise send_error_to_api(e) from e

    return {"ok": True, "messageId": result.message_id}


__all__ = ["router", "SEND_ERRORS", "send_error_to_api", "enforce_email_rate_limits"]
# Fin del archivo backend/app/modules/email/routes/email_routes.py
