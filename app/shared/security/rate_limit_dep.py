# -*- coding: utf-8 -*-
"""
backend/app/shared/security/rate_limit_dep.py

Dependencias FastAPI y helpers de rate limiting.

- RateLimitExceeded: ApiError 429 con Retry-After y error.retryAfterSeconds
- RateLimitDep: dependencia configurable por endpoint/alcance
- check_rate_limit(): versión funcional para usar dentro de un handler

Autor: InvoiceDesk
Fecha: 2025-12-21
"""
# Note: NOT using 'from __future__ import annotations' to ensure FastAPI
# can properly resolve Request type annotation for dependency injection

import inspect
import logging
from typing import Callable, Optional

from fastapi import Request, status

from app.shared.http_utils.request_meta import get_client_ip
from app.shared.security.rate_limit_service import RateLimitResult, get_rate_limiter
from app.shared.utils.api_errors import ApiError

logger = logging.getLogger(__name__)


class RateLimitExceeded(ApiError):
    """429 con envelope {code: RATE_LIMIT, retryAfterSeconds}."""

    def __init__(self, retry_after: int, message: Optional[str] = None):
        retry_after = max(1, int(retry_after))
        super().__init__(
            status.HTTP_429_TOO_MANY_REQUESTS,
            "RATE_LIMIT",
            message or "Too many requests.",
            headers={"Retry-After": str(retry_after)},
            retryAfterSeconds=retry_after,
        )
        self.retry_after = retry_after


def _mask_identifier(identifier: Optional[str], scope: str) -> str:
    """Enmascara el identificador para logs."""
    if not identifier or identifier == "unknown":
        return str(identifier)

    if "@" in identifier:
        local, domain = identifier.split("@", 1)
        return f"{local[:2]}***@{domain}" if len(local) > 2 else f"***@{domain}"

    if scope == "ip":
        parts = identifier.split(".")
        if len(parts) == 4:
            return f"{parts[0]}.{parts[1]}.***.***"
        if len(identifier) > 8:
            return f"{identifier[:8]}***"

    return identifier[:4] + "***" if len(identifier) > 4 else "***"


async def check_rate_limit(
    endpoint: str,
    scope: str,
    identifier: Optional[str],
    limit: int,
    window_ms: int,
) -> RateLimitResult:
    """
    Cuenta el request y levanta RateLimitExceeded si se pasó del límite.

    Raises:
        RateLimitExceeded
    """
    result = await get_rate_limiter().check(endpoint, scope, identifier, limit, window_ms)
    if not result.allowed:
        logger.warning(
            "[RateLimit] excedido endpoint=%s scope=%s id=%s count=%d limit=%d retry_after=%ds",
            endpoint, scope, _mask_identifier(identifier, scope),
            result.count, result.limit, result.retry_after_seconds,
        )
        raise RateLimitExceeded(result.retry_after_seconds)
    return result


class RateLimitDep:
    """
    Dependencia FastAPI de rate limiting.

    Usage:
        @router.post("/pdf")
        async def pdf(
            _: RateLimitResult = Depends(RateLimitDep("pdf", "ip", limit=120)),
        ):
            ...

    `window_ms=None` usa EMAIL_RATE_WINDOW_MS; `limit=None` usa EMAIL_RATE_LIMIT.
    """

    def __init__(
        self,
        endpoint: str,
        scope: str = "ip",
        limit: Optional[int] = None,
        window_ms: Optional[int] = None,
        identifier_extractor: Optional[Callable[[Request], object]] = None,
    ):
        self.endpoint = endpoint
        self.scope = scope
        self.limit = limit
        self.window_ms = window_ms
        self.identifier_extractor = identifier_extractor

    async def _extract_identifier(self, request: Request) -> Optional[str]:
        if self.identifier_extractor is not None:
            result = self.identifier_extractor(request)
            if inspect.isawaitable(result):
                result = await result
            return result
        if self.scope == "ip":
            return get_client_ip(request)
        return None

    async def __call__(self, request: Request) -> RateLimitResult:
        from app.shared.config import settings

        limit = self.limit if self.limit is not None else settings.email_rate_limit
        window_ms = self.window_ms if self.window_ms is not None else settings.email_rate_window_ms
        identifier = await self._extract_identifier(request)
        return await check_rate_limit(self.endpoint, self.scope, identifier, limit, window_ms)


__all__ = [
    "RateLimitDep",
    "RateLimitExceeded",
    "check_rate_limit",
]
# Fin del archivo backend/app/shared/security/rate_limit_dep.py
