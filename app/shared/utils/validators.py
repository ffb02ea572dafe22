# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/validators.py

Validadores de identificadores que llegan del cliente (path, body, JWT).

Las columnas id de PostgreSQL son UUID: un valor que no lo es nunca
coincide con una fila, y mandarlo al driver termina en DataError. Los
servicios lo tratan como "no encontrado" antes de tocar la BD.

Autor: InvoiceDesk
Fecha: 2025-12-26
"""

from typing import Any
from uuid import UUID


def validate_uuid(value: Any) -> bool:
    """True si `value` es un UUID (objeto o string)."""
    if isinstance(value, UUID):
        return True
    if not value or not isinstance(value, str):
        return False
    try:
        UUID(value.strip())
        return True
    except (ValueError, AttributeError):
        return False


__all__ = ["validate_uuid"]
# Fin del archivo backend/app/shared/utils/validators.py
