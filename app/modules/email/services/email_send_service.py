# -*- coding: utf-8 -*-
"""
backend/app/modules/email/services/email_send_service.py

Envío de facturas y ofertas por email con el PDF adjunto.

Orden dentro del servicio (guard, rate limit y auth ya pasaron en la ruta):
1. parse_email_body / validate_email_request → InvalidJson, EmailValidationError
2. Payload desde BD (id + user_id) y chequeo del hash legacy
3. EMAIL_FROM configurado → EmailNotConfigured
4. Identidad de remitente verificada
5. Mensaje + PDF (create_pdf_attachment, mismo camino que /api/pdf)
6. UNA llamada al proveedor → EmailSendFailed
7. last_used_at, auditoría y metadatos de envío (fallos solo se loguean)
8. Facturas: lock_invoice_after_send, solo si el proveedor aceptó

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from pydantic import ValidationError

from app.shared.database.table_gateway import StorageError, TableGateway
from app.shared.integrations.email_sender import EmailAttachment, EmailSendError, IEmailSender
from app.shared.utils.email_utils import normalize_valid_email
from app.modules.audit.services import AuditAction, record_audit_event
from app.modules.documents.enums import DocumentType, normalize_document_type
from app.modules.documents.services import (
    create_pdf_attachment,
    enforce_legacy_payload_match,
    load_document_payload_from_db,
    update_send_metadata,
)
from app.modules.email.schemas import (
    MAX_MESSAGE_LENGTH,
    MAX_SUBJECT_LENGTH,
    EmailSendCommand,
    EmailSendRequest,
    EmailSendResult,
)
from app.modules.email.services.email_errors import (
    EmailSendFailed,
    EmailValidationError,
    InvalidJson,
)
from app.modules.email.services.message_builder import build_document_message
from app.modules.invoices.services.invoice_lock_service import lock_invoice_after_send
from app.modules.sender_identities.services import SenderIdentityService

logger = logging.getLogger(__name__)

_DOC_LABELS = {
    DocumentType.INVOICE: "Rechnung",
    DocumentType.OFFER: "Angebot",
}


def parse_email_body(raw: bytes) -> dict:
    """Body crudo → dict. Vacío cuenta como {}."""
    if not raw or not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise InvalidJson() from e
    if not isinstance(body, dict):
        raise InvalidJson()
    return body


def validate_email_request(
    body: Mapping[str, Any],
    *,
    doc_id: Optional[str] = None,
    doc_type: Optional[str] = None,
) -> EmailSendCommand:
    """
    `doc_id`/`doc_type` fijan el documento (p.ej. desde el path de finalize).

    Raises:
        EmailValidationError: bad_request, invalid_email, subject_too_long, message_too_long
    """
    try:
        req = EmailSendRequest.model_validate(dict(body))
    except ValidationError as e:
        raise EmailValidationError("Invalid request body.") from e

    resolved_id = doc_id or req.resolved_doc_id
    resolved_type = doc_type or req.resolved_type
    subject = (req.subject or "").strip()
    to_raw = (req.to or "").strip()

    if not resolved_id or not resolved_type or not to_raw or not subject or not req.sender_identity_id:
        raise EmailValidationError(
            "docId, type, to, subject and senderIdentityId are required.", code="bad_request"
        )

    to = normalize_valid_email(to_raw)
    if not to:
        raise EmailValidationError("Invalid recipient email.", code="invalid_email")
    if len(subject) > MAX_SUBJECT_LENGTH:
        raise EmailValidationError(
            f"Subject too long (max {MAX_SUBJECT_LENGTH}).", code="subject_too_long"
        )
    message = req.message or ""
    if len(message) > MAX_MESSAGE_LENGTH:
        raise EmailValidationError(
            f"Message too long (max {MAX_MESSAGE_LENGTH}).", code="message_too_long"
        )

    return EmailSendCommand(
        doc_id=str(resolved_id),
        doc_type=str(resolved_type),
        to=to,
        subject=subject,
        message=message,
        sender_identity_id=str(req.sender_identity_id),
    )


def default_message_text(doc_type: DocumentType, doc: Mapping[str, Any]) -> str:
    label = _DOC_LABELS.get(doc_type, "Dokument")
    number = doc.get("number")
    return f"Im Anhang finden Sie {label}{f' {number}' if number else ''}."


class DocumentEmailService:
    """
    Orquesta el envío de un documento. Un envío aceptado hace exactamente
    una llamada al proveedor y, para facturas, exactamente un bloqueo.
    """

    def __init__(
        self,
        gateway: TableGateway,
        email_sender: IEmailSender,
        *,
        app_settings=None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if app_settings is None:
            from app.shared.config import settings as app_settings
        self.gateway = gateway
        self.email_sender = email_sender
        self.settings = app_settings
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.identities = SenderIdentityService(
            gateway, email_sender, app_settings=app_settings, clock=self.clock
        )

    async def _company_name(self, user_id: str) -> Optional[str]:
        try:
            row = await self.gateway.select_one(
                "user_settings", {"user_id": str(user_id)}, columns=("company_name",)
            )
        except StorageError as e:
            logger.warning("[EmailSend] user_settings no disponible user=%s: %s", user_id, e.message)
            return None
        return (row or {}).get("company_name")

    async def send_document(
        self,
        user_id: str,
        command: EmailSendCommand,
        body: Optional[Mapping[str, Any]] = None,
    ) -> EmailSendResult:
        """
        Raises:
            DocumentError, EmailError, SenderIdentityError: antes del envío
            InvoiceLockError: el proveedor aceptó pero la factura no se bloqueó
        """
        payload = await load_document_payload_from_db(
            self.gateway, command.doc_type, command.doc_id, user_id
        )
        doc_type = normalize_document_type(command.doc_type)
        enforce_legacy_payload_match(body, payload)

        from_email = self.identities.require_from_email()
        identity = await self.identities.get_verified_identity(user_id, command.sender_identity_id)
        company_name = await self._company_name(user_id)

        pdf = create_pdf_attachment(doc_type, payload)
        message = build_document_message(
            identity=identity,
            from_email=from_email,
            sender_domain_name=self.settings.sender_domain_name,
            to=command.to,
            subject=command.subject,
            text=command.message or default_message_text(doc_type, payload.doc),
            company_name=company_name,
            attachments=[EmailAttachment(filename=pdf.filename, content=pdf.buffer)],
        )

        try:
            message_id = await self.email_sender.send_email(message)
        except EmailSendError as e:
            logger.error("[EmailSend] proveedor rechazó %s=%s: %s", doc_type, command.doc_id, e)
            raise EmailSendFailed(str(e) or None) from e

        logger.info(
            "[EmailSend] enviado %s=%s user=%s message_id=%s",
            doc_type, command.doc_id, user_id, message_id,
        )
        await self._after_send(user_id, doc_type, command, identity, message_id)

        locked = False
        if doc_type == DocumentType.INVOICE:
            await lock_invoice_after_send(self.gateway, command.doc_id, user_id, clock=self.clock)
            locked = True

        return EmailSendResult(
            message_id=message_id, doc_type=doc_type, doc_id=command.doc_id, locked=locked
        )

    async def _after_send(
        self,
        user_id: str,
        doc_type: DocumentType,
        command: EmailSendCommand,
        identity: Mapping[str, Any],
        message_id: str,
    ) -> None:
        await self.identities.mark_used(identity["id"])
        await record_audit_event(
            self.gateway,
            user_id=user_id,
            action=AuditAction.INVOICE_EMAIL_SENT,
            entity_type=doc_type.value,
            entity_id=command.doc_id,
            meta={"to": command.to, "sender_identity_id": identity["id"], "message_id": message_id},
        )
        try:
            await update_send_metadata(
                self.gateway,
                self.gateway,
                doc_type,
                command.doc_id,
                user_id,
                to=command.to,
                clock=self.clock,
            )
        except StorageError as e:
            logger.error(
                "[EmailSend] metadatos de envío no actualizados %s=%s code=%s: %s",
                doc_type, command.doc_id, e.code, e.message,
            )


__all__ = [
    "DocumentEmailService",
    "parse_email_body",
    "validate_email_request",
    "default_message_text",
]
# Fin del archivo backend/app/modules/email/services/email_send_service.py
