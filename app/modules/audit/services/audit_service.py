# -*- coding: utf-8 -*-
"""
backend/app/modules/audit/services/audit_service.py

Registro de eventos de auditoría.

La auditoría acompaña acciones que ya ocurrieron (un email enviado, una
identidad verificada); si la escritura falla se loguea y la acción
principal sigue su curso.

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

import logging
from enum import StrEnum
from typing import Any, Mapping, Optional

from app.shared.database.table_gateway import RowInserter, StorageError

logger = logging.getLogger(__name__)

AUDIT_EVENTS_TABLE = "audit_events"


class AuditAction(StrEnum):
    INVOICE_EMAIL_SENT = "invoice_email_sent"
    SENDER_IDENTITY_CREATED = "sender_identity_created"
    SENDER_IDENTITY_VERIFICATION_SENT = "sender_identity_verification_sent"
    SENDER_IDENTITY_VERIFIED = "sender_identity_verified"
    SENDER_IDENTITY_TEST_EMAIL_SENT = "sender_identity_test_email_sent"
    SENDER_IDENTITY_DISABLED = "sender_identity_disabled"
    DEFAULT_SENDER_IDENTITY_UPDATED = "default_sender_identity_updated"


async def record_audit_event(
    inserter: RowInserter,
    *,
    user_id: Optional[str],
    action: str,
    entity_type: Optional[str] = None,
    entity_id: Optional[str] = None,
    meta: Optional[Mapping[str, Any]] = None,
) -> Optional[dict]:
    """Inserta un evento; devuelve la fila o None si el almacenamiento falló."""
    values = {
        "user_id": user_id,
        "action": str(action),
        "entity_type": entity_type,
        "entity_id": entity_id,
        "meta": dict(meta or {}),
    }
    try:
        return await inserter.insert_row(AUDIT_EVENTS_TABLE, values)
    except StorageError as e:
        logger.warning(
            "[Audit] no se pudo registrar action=%s entity=%s:%s error=%s",
            action, entity_type, entity_id, e.message,
        )
        return None


__all__ = ["AUDIT_EVENTS_TABLE", "AuditAction", "record_audit_event"]
# Fin del archivo backend/app/modules/audit/services/audit_service.py
