# -*- coding: utf-8 -*-
"""
backend/app/core/__init__.py

Fachada de componentes centrales (configuración, logging, base de datos)
sobre la implementación en `app.shared.*`.

Autor: InvoiceDesk
Fecha: 2025-12-20
"""

from .settings import get_settings
from .logging import setup_logging, setup_logging_from_settings
from .db import (
    engine,
    SessionLocal,
    Base,
    get_db,
    get_table_gateway,
    check_database_health,
)

__all__ = [
    "get_settings",
    "setup_logging",
    "setup_logging_from_settings",
    "engine",
    "SessionLocal",
    "Base",
    "get_db",
    "get_table_gateway",
    "check_database_health",
]
