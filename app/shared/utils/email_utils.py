# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/email_utils.py

Validación y normalización de direcciones de correo.

Dos filtros: la forma mínima local@dominio.tld y, encima, la sintaxis RFC
de `email-validator` (sin consultas DNS).

Funciones:
- normalize_email(email) -> str
- is_valid_email_address(email) -> bool
- normalize_valid_email(email) -> Optional[str]

Autor: InvoiceDesk
Actualizado: 2025-12-21
"""

import re
from typing import Optional

from email_validator import EmailNotValidError, validate_email

_BASIC_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(email: Optional[str]) -> str:
    """strip + lowercase. No valida."""
    return str(email or "").strip().lower()


def is_valid_email_address(email: Optional[str]) -> bool:
    if not email or not _BASIC_EMAIL_RE.match(email):
        return False
    try:
        validate_email(email, check_deliverability=False)
        return True
    except EmailNotValidError:
        return False


def normalize_valid_email(email: Optional[str]) -> Optional[str]:
    """Email normalizado, o None si no es válido."""
    normalized = normalize_email(email)
    return normalized if is_valid_email_address(normalized) else None


__all__ = ["normalize_email", "is_valid_email_address", "normalize_valid_email"]
# Fin del archivo backend/app/shared/utils/email_utils.py
