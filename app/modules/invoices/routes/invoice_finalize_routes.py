# -*- coding: utf-8 -*-
"""
backend/app/modules/invoices/routes/invoice_finalize_routes.py

POST /api/invoices/{invoice_id}/finalize

- Sin body (o sin `to`): DRAFT → ISSUED y bloqueo
- Con `to`: mismo orden que /api/email. Rate limit (IP, auth, usuario)
  ANTES de validar el body o leer la factura; luego envío completo y
  bloqueo tras el envío
- Un body que no es JSON cuenta como intento de envío

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from app.shared.database.table_gateway import StorageError
from app.shared.utils.api_errors import not_authenticated
from app.modules.auth.dependencies import get_optional_user_id
from app.modules.documents.enums import DocumentType
from app.modules.email.routes.deps import get_document_email_service
from app.modules.email.routes.email_routes import (
    SEND_ERRORS,
    enforce_email_rate_limits,
    send_error_to_api,
)
from app.modules.email.services import EmailValidationError, InvalidJson
from app.modules.email.services.email_send_service import (
    DocumentEmailService,
    parse_email_body,
    validate_email_request,
)
from app.modules.invoices.facades.invoice_finalize_facade import InvoiceFinalizeFacade
from app.modules.invoices.routes.deps import get_invoice_finalize_facade
from app.modules.invoices.schemas import InvoiceFinalizeRequest, to_finalized_out

logger = logging.getLogger(__name__)

router = APIRouter(tags=["invoices"])


def requests_send(raw: bytes) -> bool:
    """Body con `to` (o ilegible): el request se cuenta en el limitador de email."""
    try:
        body = parse_email_body(raw)
    except InvalidJson:
        return True
    return bool(str(body.get("to") or "").strip())


@router.post("/{invoice_id}/finalize", summary="Finalizar (y opcionalmente enviar) una factura")
async def finalize_invoice(
    invoice_id: str,
    request: Request,
    user_id: Optional[str] = Depends(get_optional_user_id),
    facade: InvoiceFinalizeFacade = Depends(get_invoice_finalize_facade),
    email_service: DocumentEmailService = Depends(get_document_email_service),
):
    raw = await request.body()
    if requests_send(raw):
        await enforce_email_rate_limits(request, user_id)
    elif not user_id:
        raise not_authenticated()

    try:
        body = parse_email_body(raw)
        try:
            send_request = InvoiceFinalizeRequest.model_validate(body)
        except ValidationError as e:
            raise EmailValidationError("Invalid request body.") from e

        send = None
        if send_request.wants_send:
            command = validate_email_request(
                body, doc_id=invoice_id, doc_type=DocumentType.INVOICE.value
            )

            async def send():
                return await email_service.send_document(user_id, command, body)

        invoice = await facade.finalize(invoice_id, user_id, send=send)
    except (*SEND_ERRORS, StorageError) as e:
        raise send_error_to_api(e) from e

    return {"ok": True, "invoice": to_finalized_out(invoice)}


__all__ = ["router", "requests_send"]
# Fin del archivo backend/app/modules/invoices/routes/invoice_finalize_routes.py
