# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/services/send_metadata_service.py

Metadatos de envío de facturas y ofertas tras un envío exitoso:

- sent_count + 1
- sent_at: solo en el primer envío
- last_sent_at / last_sent_to
- sent_via (default "EMAIL")
- DRAFT / ISSUED → SENT

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from app.shared.database.table_gateway import ConditionalUpdater, SingleRowReader
from app.modules.documents.enums import table_for

logger = logging.getLogger(__name__)

SEND_VIA_EMAIL = "EMAIL"

# Estados que pasan a SENT con el primer envío
SENDABLE_STATUSES = ("DRAFT", "ISSUED")


async def update_send_metadata(
    reader: SingleRowReader,
    updater: ConditionalUpdater,
    doc_type: Any,
    doc_id: Optional[str],
    user_id: Optional[str],
    to: Optional[str] = None,
    via: Optional[str] = None,
    *,
    clock: Optional[Callable[[], datetime]] = None,
) -> Optional[dict]:
    """
    Devuelve los valores escritos (None si faltan ids).

    Raises:
        StorageError: la lectura o el update fallaron
    """
    if not doc_id or not user_id:
        return None

    table = table_for(doc_type)
    where = {"id": str(doc_id), "user_id": str(user_id)}
    now_iso = (clock or (lambda: datetime.now(timezone.utc)))().isoformat()

    row = await reader.select_one(table, where, columns=("sent_count", "sent_at", "status")) or {}
    previous_count = int(row.get("sent_count") or 0)

    values = {
        "sent_at": row.get("sent_at") if previous_count else now_iso,
        "last_sent_at": now_iso,
        "sent_count": previous_count + 1,
        "sent_via": via or SEND_VIA_EMAIL,
    }
    if to:
        values["last_sent_to"] = to
    if row.get("status") in SENDABLE_STATUSES:
        values["status"] = "SENT"

    await updater.update_where(table, values, where)
    logger.info(
        "[SendMetadata] %s %s sent_count=%d status=%s",
        table, doc_id, values["sent_count"], values.get("status", row.get("status")),
    )
    return values


__all__ = ["SEND_VIA_EMAIL", "SENDABLE_STATUSES", "update_send_metadata"]
# Fin del archivo backend/app/modules/documents/services/send_metadata_service.py
