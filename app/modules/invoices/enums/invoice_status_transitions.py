# -*- coding: utf-8 -*-
"""
backend/app/modules/invoices/enums/invoice_status_transitions.py

Mapa de transiciones válidas para InvoiceStatus.

Reglas de transición:
- DRAFT  → ISSUED | SENT | CANCELED
- ISSUED → SENT | PAID | CANCELED
- SENT   → PAID | CANCELED
- PAID, CANCELED → (terminales)

Solo DRAFT, ISSUED y SENT admiten bloqueo (finalización).

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from typing import Dict, FrozenSet, Set

from .invoice_status_enum import InvoiceStatus


VALID_STATUS_TRANSITIONS: Dict[InvoiceStatus, Set[InvoiceStatus]] = {
    InvoiceStatus.DRAFT: {
        InvoiceStatus.ISSUED,
        InvoiceStatus.SENT,
        InvoiceStatus.CANCELED,
    },
    InvoiceStatus.ISSUED: {
        InvoiceStatus.SENT,
        InvoiceStatus.PAID,
        InvoiceStatus.CANCELED,
    },
    InvoiceStatus.SENT: {
        InvoiceStatus.PAID,
        InvoiceStatus.CANCELED,
    },
    InvoiceStatus.PAID: set(),
    InvoiceStatus.CANCELED: set(),
}

LOCKABLE_STATUSES: FrozenSet[InvoiceStatus] = frozenset(
    {InvoiceStatus.DRAFT, InvoiceStatus.ISSUED, InvoiceStatus.SENT}
)


def _coerce(status) -> InvoiceStatus | None:
    try:
        return InvoiceStatus(str(status).upper())
    except ValueError:
        return None


def is_valid_status_transition(from_status, to_status) -> bool:
    """
    Valida si una transición es permitida. Acepta enums o strings.
    Quedarse en el mismo estado no es una transición y se considera válido.
    """
    src, dst = _coerce(from_status), _coerce(to_status)
    if src is None or dst is None:
        return False
    if src == dst:
        return True
    return dst in VALID_STATUS_TRANSITIONS[src]


def get_allowed_transitions(from_status) -> Set[InvoiceStatus]:
    src = _coerce(from_status)
    return set(VALID_STATUS_TRANSITIONS.get(src, set())) if src else set()


def is_lockable_status(status) -> bool:
    return _coerce(status) in LOCKABLE_STATUSES


__all__ = [
    "VALID_STATUS_TRANSITIONS",
    "LOCKABLE_STATUSES",
    "is_valid_status_transition",
    "get_allowed_transitions",
    "is_lockable_status",
]

# Fin del archivo backend/app/modules/invoices/enums/invoice_status_transitions.py
