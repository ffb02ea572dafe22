# -*- coding: utf-8 -*-
"""
backend/app/modules/invoices/services/invoice_lock_service.py

Bloqueo de facturas tras el envío.

lock_invoice_after_send emite UN solo update condicional
(id + user_id) con is_locked=true y finalized_at en ISO-8601. No relee la
factura ni comprueba is_locked: el trigger prevent_locked_invoice_update
es quien garantiza la inmutabilidad y conserva el primer finalized_at,
así que re-bloquear no cambia nada.

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from app.shared.database.table_gateway import ConditionalUpdater, StorageError
from app.modules.invoices.facades.errors import InvoiceLockError

logger = logging.getLogger(__name__)

INVOICES_TABLE = "invoices"

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def lock_invoice_after_send(
    updater: ConditionalUpdater,
    invoice_id,
    user_id,
    *,
    clock: Optional[Clock] = None,
) -> None:
    """
    Marca la factura como bloqueada (finalizada).

    Raises:
        InvoiceLockError: si el update falla o no afecta ninguna fila
    """
    if not invoice_id or not user_id:
        return

    finalized_at = (clock or _utcnow)().isoformat()
    try:
        affected = await updater.update_where(
            INVOICES_TABLE,
            {"is_locked": True, "finalized_at": finalized_at},
            {"id": str(invoice_id), "user_id": str(user_id)},
        )
    except StorageError as e:
        logger.error("[InvoiceLock] update falló invoice=%s code=%s: %s", invoice_id, e.code, e.message)
        raise InvoiceLockError(e.message, guard_code=e.code) from e
    except Exception as e:
        logger.error("[InvoiceLock] update falló invoice=%s: %s", invoice_id, e)
        raise InvoiceLockError(str(e) or e.__class__.__name__) from e

    if affected == 0:
        raise InvoiceLockError("invoice not found")

    logger.info("[InvoiceLock] invoice=%s bloqueada (finalized_at=%s)", invoice_id, finalized_at)


__all__ = ["lock_invoice_after_send", "INVOICES_TABLE"]
# Fin del archivo backend/app/modules/invoices/services/invoice_lock_service.py
