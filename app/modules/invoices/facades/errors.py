# -*- coding: utf-8 -*-
"""
backend/app/modules/invoices/facades/errors.py

Excepciones de dominio para el módulo de facturas.
Cada una expone un `code` estable y el `status_code` HTTP con el que la
capa de rutas la traduce al envelope de error.

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from typing import Optional


class InvoiceError(Exception):
    """Base de errores del módulo de facturas."""
    code = "INVOICE_ERROR"
    status_code = 500

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.__class__.__doc__ or self.code
        super().__init__(self.message)


class InvoiceNotFound(InvoiceError):
    """Factura no encontrada o de otro usuario."""
    code = "INVOICE_NOT_FOUND"
    status_code = 404

    def __init__(self, invoice_id):
        self.invoice_id = invoice_id
        super().__init__(f"Invoice not found: {invoice_id}")


class InvoiceAlreadyLocked(InvoiceError):
    """La factura ya está finalizada; su contenido es inmutable."""
    code = "INVOICE_LOCKED_CONTENT"
    status_code = 409


class InvoiceLockInvalidStatus(InvoiceError):
    """El estado actual no admite finalizar la factura."""
    code = "INVOICE_LOCK_INVALID_STATUS"
    status_code = 409

    def __init__(self, status=None, message: Optional[str] = None):
        self.status = status
        super().__init__(message or f"Invoice status does not allow locking: {status}")


class InvoiceNumberImmutable(InvoiceError):
    """El número de una factura emitida o bloqueada no puede cambiar."""
    code = "INVOICE_NUMBER_IMMUTABLE"
    status_code = 409


class StatusTransitionNotAllowed(InvoiceError):
    """Transición de estado no permitida."""
    code = "status_transition_not_allowed"
    status_code = 409

    def __init__(self, from_status=None, to_status=None, message: Optional[str] = None):
        self.from_status = from_status
        self.to_status = to_status
        default_msg = f"Status transition not allowed: {from_status} → {to_status}"
        super().__init__(message or default_msg)


class InvoiceStorageError(InvoiceError):
    """Fallo de persistencia no atribuible a una regla de negocio."""
    code = "STORAGE_ERROR"
    status_code = 500


class InvoiceLockError(InvoiceStorageError):
    """No se pudo bloquear la factura (el mensaje empieza con 'Failed to lock invoice')."""

    def __init__(self, reason: str, guard_code: Optional[str] = None):
        self.reason = reason
        self.guard_code = guard_code
        super().__init__(f"Failed to lock invoice: {reason}")


# Códigos que levanta el trigger de BD → excepción de dominio
GUARD_CODE_ERRORS = {
    "INVOICE_LOCKED_CONTENT": InvoiceAlreadyLocked,
    "INVOICE_NUMBER_IMMUTABLE": InvoiceNumberImmutable,
    "INVOICE_LOCK_INVALID_STATUS": InvoiceLockInvalidStatus,
    "STATUS_TRANSITION_NOT_ALLOWED": StatusTransitionNotAllowed,
}


def error_from_guard_code(code: Optional[str], message: str) -> Optional[InvoiceError]:
    """Traduce un código de guardia de BD a su excepción de dominio (o None)."""
    if not code:
        return None
    exc_cls = GUARD_CODE_ERRORS.get(code.upper())
    if exc_cls is None:
        return None
    return exc_cls(message=message)


__all__ = [
    "InvoiceError",
    "InvoiceNotFound",
    "InvoiceAlreadyLocked",
    "InvoiceLockInvalidStatus",
    "InvoiceNumberImmutable",
    "StatusTransitionNotAllowed",
    "InvoiceStorageError",
    "InvoiceLockError",
    "GUARD_CODE_ERRORS",
    "error_from_guard_code",
]

# Fin del archivo backend/app/modules/invoices/facades/errors.py
