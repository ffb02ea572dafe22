# -*- coding: utf-8 -*-
"""
backend/app/core/db.py

Fachada de la capa de datos (SQLAlchemy async) sobre
`app.shared.database.database`.

Autor: InvoiceDesk
Fecha: 2025-12-20
"""

from app.shared.database.database import (
    engine,
    SessionLocal,
    Base,
    get_db,
    get_table_gateway,
    check_database_health,
)

__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "get_db",
    "get_table_gateway",
    "check_database_health",
]
