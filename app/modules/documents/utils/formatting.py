# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/utils/formatting.py

Formato de importes y fechas al estilo de-DE ("1.234,56 €", "5.1.2026").

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

_CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£", "CHF": "CHF"}


def to_decimal(value: Any) -> Decimal:
    try:
        return Decimal(str(value if value is not None else 0))
    except InvalidOperation:
        return Decimal(0)


def format_currency(amount: Any, currency: str = "EUR") -> str:
    """1234.5 → '1.234,50 €'; negativos con signo delante."""
    value = to_decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    formatted = f"{abs(value):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    symbol = _CURRENCY_SYMBOLS.get((currency or "EUR").upper(), currency)
    return f"{sign}{formatted} {symbol}"


def format_date(value: Any) -> str:
    """'2026-01-05' → '5.1.2026'; lo que no se pueda leer se devuelve tal cual."""
    if not value:
        return ""
    if isinstance(value, datetime):
        d = value.date()
    elif isinstance(value, date):
        d = value
    else:
        try:
            d = date.fromisoformat(str(value)[:10])
        except ValueError:
            return str(value)
    return f"{d.day}.{d.month}.{d.year}"


__all__ = ["format_currency", "format_date", "to_decimal"]
