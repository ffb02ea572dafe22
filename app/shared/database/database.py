# -*- coding: utf-8 -*-
"""
backend/app/shared/database/database.py

SQLAlchemy 2.0 async + asyncpg. NullPool en la app; el pooling lo hace
el proveedor (PgBouncer / Supabase pooler).

Provee:
- engine (create_async_engine)
- SessionLocal (async_sessionmaker)
- Dependencias FastAPI: get_async_session / get_db / get_table_gateway
- context manager: session_scope()
- check_database_health()

Notas:
- El modo SSL viaja en connect_args (asyncpg no entiende ?sslmode= en la URL).
- El engine no abre conexiones al importarse; la primera sesión conecta.

Autor: InvoiceDesk
Fecha: 2025-12-20
"""

import ssl
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from uuid import uuid4

from fastapi import Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.shared.config import settings
from app.shared.database.base import Base  # reutilizamos la Base única
from app.shared.database.table_gateway import SqlAlchemyTableGateway

logger = logging.getLogger(__name__)


def build_connect_args(sslmode: str, command_timeout_s: float) -> dict:
    """
    connect_args para asyncpg según DB_SSLMODE.

    - disable: sin TLS
    - prefer: TLS si el servidor lo ofrece
    - require: TLS con verificación estándar de certificado
    """
    def _statement_name() -> str:
        # Nombres únicos: evita colisiones de prepared statements detrás de PgBouncer
        return f"__asyncpg_{uuid4().hex[:8]}__"

    args: dict = {
        "statement_cache_size": 0,
        "prepared_statement_cache_size": 0,
        "prepared_statement_name_func": _statement_name,
        "command_timeout": command_timeout_s,
    }
    if sslmode == "require":
        args["ssl"] = ssl.create_default_context(purpose=ssl.Purpose.SERVER_AUTH)
    elif sslmode == "prefer":
        args["ssl"] = "prefer"
    return args


engine = create_async_engine(
    settings.database_url,
    poolclass=NullPool,
    echo=settings.db_echo_sql,
    connect_args=build_connect_args(settings.db_sslmode, settings.db_command_timeout_s),
)

SessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    class_=AsyncSession,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        try:
            yield session
        except SQLAlchemyError:
            # rollback para liberar cualquier transacción/lock
            await session.rollback()
            raise


# Alias usado por los routers
get_db = get_async_session


async def get_table_gateway(
    db: AsyncSession = Depends(get_db),
) -> SqlAlchemyTableGateway:
    """Dependencia FastAPI: gateway por request sobre la sesión del request."""
    return SqlAlchemyTableGateway(db)


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """Sesión para scripts; commit/rollback queda a cargo de quien la usa."""
    async with SessionLocal() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()


async def check_database_health(timeout_s: float = 3.0, sql: str = "SELECT 1") -> bool:
    """True si la base responde a `sql` dentro de `timeout_s` segundos."""
    try:
        async with asyncio.timeout(timeout_s):
            async with engine.connect() as conn:
                await conn.execute(text(sql))
        return True
    except (SQLAlchemyError, OSError, TimeoutError) as e:
        logger.warning("[DB] Health check falló: %s", e)
        return False


__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "build_connect_args",
    "get_async_session",
    "get_db",
    "get_table_gateway",
    "session_scope",
    "check_database_health",
]
# Fin del archivo backend/app/shared/database/database.py
