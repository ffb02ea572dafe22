# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/exception_handler.py

Middleware que captura excepciones no manejadas y responde con el envelope
JSON estándar:

    500 {"ok": false, "error": {"code": "INTERNAL_SERVER_ERROR", "message": ..., "request_id": ...}}

Autor: InvoiceDesk
Fecha: 2025-12-21
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.shared.utils.json_response import error_response

logger = logging.getLogger(__name__)

# Headers de request ID (Railway, nginx, etc.)
REQUEST_ID_HEADERS = ["x-request-id", "x-railway-request-id", "x-correlation-id"]


def get_request_id(request: Request) -> str:
    """Extrae request_id de headers o genera uno nuevo."""
    for header in REQUEST_ID_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return uuid.uuid4().hex[:16]


class JSONExceptionMiddleware(BaseHTTPMiddleware):
    """Nunca text/plain: todo 500 sale como JSON con request_id."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = get_request_id(request)
        request.state.request_id = request_id

        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "unhandled_exception request_id=%s method=%s path=%s error=%r",
                request_id,
                request.method,
                request.url.path,
                e,
            )
            return error_response(
                500,
                "INTERNAL_SERVER_ERROR",
                "Internal server error.",
                headers={"X-Request-ID": request_id},
                request_id=request_id,
            )


__all__ = ["JSONExceptionMiddleware", "get_request_id", "REQUEST_ID_HEADERS"]
