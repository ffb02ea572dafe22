# -*- coding: utf-8 -*-
"""
backend/app/shared/http_utils/request_meta.py

IP y User-Agent del request, para rate limiting y auditoría.

Detrás de un proxy (Railway, Vercel, nginx) la IP real viaja en
X-Forwarded-For; solo se usa con TRUST_PROXY_HEADERS=true, porque un
cliente directo puede falsificar ese header y saltarse el rate limit.

Autor: InvoiceDesk
Fecha: 2025-12-21
"""
import os
from typing import Optional

from starlette.requests import Request


def _trust_proxy_headers() -> bool:
    return os.getenv("TRUST_PROXY_HEADERS", "false").lower() in ("true", "1", "yes")


def get_client_ip(request: Request) -> str:
    """
    IP del cliente.

    Con TRUST_PROXY_HEADERS: primer X-Forwarded-For, luego X-Real-IP.
    Siempre termina en request.client.host o "unknown".
    """
    if _trust_proxy_headers():
        xff = request.headers.get("x-forwarded-for")
        if xff and xff.split(",")[0].strip():
            return xff.split(",")[0].strip()
        real_ip = request.headers.get("x-real-ip")
        if real_ip and real_ip.strip():
            return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def get_user_agent(request: Request) -> Optional[str]:
    ua = request.headers.get("user-agent")
    return ua.strip() if ua else None


__all__ = [
    "get_client_ip",
    "get_user_agent",
]
# Fin del archivo backend/app/shared/http_utils/request_meta.py
