# -*- coding: utf-8 -*-
"""
backend/app/modules/invoices/facades/invoice_finalize_facade.py

Finalización de facturas: compuerta de estado, envío opcional y bloqueo.

Orden:
1. Leer la factura (id + user_id) → InvoiceNotFound
2. Ya bloqueada → InvoiceAlreadyLocked
3. Estado no bloqueable → InvoiceLockInvalidStatus
4a. Con envío: `send()` hace el flujo de email completo (envía, metadatos, bloquea)
4b. Sin envío: DRAFT → ISSUED (validado) y bloqueo
5. Releer y devolver el estado final

Los rechazos del trigger (StorageError.code) se traducen a la excepción
de dominio equivalente; el resto a InvoiceStorageError.

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

import logging
from datetime import datetime
from typing import Awaitable, Callable, Optional

from app.shared.database.table_gateway import StorageError, TableGateway
from app.shared.utils.validators import validate_uuid
from app.modules.invoices.enums import (
    InvoiceStatus,
    is_lockable_status,
    is_valid_status_transition,
)
from app.modules.invoices.facades.errors import (
    InvoiceAlreadyLocked,
    InvoiceError,
    InvoiceLockError,
    InvoiceLockInvalidStatus,
    InvoiceNotFound,
    InvoiceStorageError,
    StatusTransitionNotAllowed,
    error_from_guard_code,
)
from app.modules.invoices.services.invoice_lock_service import (
    INVOICES_TABLE,
    lock_invoice_after_send,
)

logger = logging.getLogger(__name__)

_INVOICE_COLUMNS = ("id", "user_id", "status", "is_locked", "finalized_at")


def translate_storage_error(exc: StorageError) -> InvoiceError:
    return error_from_guard_code(exc.code, exc.message) or InvoiceStorageError(exc.message)


def translate_lock_error(exc: InvoiceLockError) -> InvoiceError:
    """Un rechazo del trigger durante el bloqueo se reporta con su propio código."""
    return error_from_guard_code(exc.guard_code, exc.message) or exc


class InvoiceFinalizeFacade:
    def __init__(
        self,
        gateway: TableGateway,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.gateway = gateway
        self.clock = clock

    async def get_invoice(self, invoice_id, user_id) -> dict:
        if not validate_uuid(str(invoice_id)):
            raise InvoiceNotFound(invoice_id)
        try:
            row = await self.gateway.select_one(
                INVOICES_TABLE,
                {"id": str(invoice_id), "user_id": str(user_id)},
                columns=_INVOICE_COLUMNS,
            )
        except StorageError as e:
            raise translate_storage_error(e) from e
        if not row:
            raise InvoiceNotFound(invoice_id)
        return row

    @staticmethod
    def ensure_finalizable(invoice: dict) -> None:
        if invoice.get("is_locked"):
            raise InvoiceAlreadyLocked("Invoice is already finalized")
        if not is_lockable_status(invoice.get("status")):
            raise InvoiceLockInvalidStatus(invoice.get("status"))

    async def issue(self, invoice: dict) -> None:
        """DRAFT → ISSUED; ISSUED y SENT se quedan como están."""
        current = str(invoice.get("status") or "").upper()
        if current != InvoiceStatus.DRAFT:
            return
        if not is_valid_status_transition(current, InvoiceStatus.ISSUED):
            raise StatusTransitionNotAllowed(current, InvoiceStatus.ISSUED.value)
        try:
            affected = await self.gateway.update_where(
                INVOICES_TABLE,
                {"status": InvoiceStatus.ISSUED.value},
                {"id": str(invoice["id"]), "user_id": str(invoice["user_id"]), "status": current},
            )
        except StorageError as e:
            raise translate_storage_error(e) from e
        if affected == 0:
            # Otro request cambió el estado entre la lectura y el update
            raise StatusTransitionNotAllowed(current, InvoiceStatus.ISSUED.value)

    async def finalize(
        self,
        invoice_id,
        user_id,
        send: Optional[Callable[[], Awaitable[object]]] = None,
    ) -> dict:
        invoice = await self.get_invoice(invoice_id, user_id)
        self.ensure_finalizable(invoice)

        if send is not None:
            await send()
        else:
            await self.issue(invoice)
            try:
                await lock_invoice_after_send(self.gateway, invoice_id, user_id, clock=self.clock)
            except InvoiceLockError as e:
                raise translate_lock_error(e) from e

        final = await self.get_invoice(invoice_id, user_id)
        logger.info(
            "[InvoiceFinalize] invoice=%s status=%s locked=%s sent=%s",
            invoice_id, final.get("status"), final.get("is_locked"), send is not None,
        )
        return final


__all__ = ["InvoiceFinalizeFacade", "translate_storage_error", "translate_lock_error"]
# Fin del archivo backend/app/modules/invoices/facades/invoice_finalize_facade.py
