# -*- coding: utf-8 -*-
"""
backend/app/routes/health_routes.py

Health checks:
- GET /health y /api/health: liveness, siempre {"ok": true}
- GET /api/health/ready: además verifica la base de datos y Redis

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

from fastapi import APIRouter

from app.core.db import check_database_health
from app.shared.redis.client import RedisClientManager
from app.shared.security import get_rate_limiter
from app.shared.utils.json_response import json_response_utf8

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness")
@router.get("/api/health", summary="Liveness (/api)")
async def health_check() -> dict:
    return {"ok": True}


@router.get("/api/health/ready", summary="Readiness (BD + Redis)")
async def health_ready():
    db_ok = await check_database_health(timeout_s=2.0)
    redis = RedisClientManager.get_instance()
    redis_status = "disabled"
    if redis.is_configured:
        redis_status = "ok" if await redis.ping() else "down"

    return json_response_utf8(
        content={
            "ok": db_ok,
            "database": {"reachable": db_ok},
            "redis": redis_status,
            "rateLimiterDegraded": get_rate_limiter().degraded,
        },
        status_code=200 if db_ok else 503,
    )


__all__ = ["router"]

# Fin del archivo backend/app/routes/health_routes.py
