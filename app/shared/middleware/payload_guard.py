# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/payload_guard.py

Middleware ASGI puro que rechaza bodies demasiado grandes antes de que
cualquier handler o parser JSON los toque.

- Content-Length declarado > max_bytes  -> 413 inmediato, la app no se invoca
- Content-Length no numérico            -> 400 bad_request
- Body chunked / sin Content-Length     -> se cuenta mientras llega; al pasar
  el límite la app ve un http.disconnect y el middleware responde 413

Solo aplica a los prefijos configurados (por defecto las rutas que generan
emails o PDFs).

Autor: InvoiceDesk
Fecha: 2025-12-21
"""

import logging
from typing import Iterable, Optional, Tuple

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.shared.utils.json_response import error_response

logger = logging.getLogger(__name__)

DEFAULT_GUARDED_PREFIXES: Tuple[str, ...] = (
    "/api/email",
    "/api/invoices",
    "/api/sender-identities",
    "/api/test-email",
    "/api/pdf",
    "/api/settings",
)

DEFAULT_MAX_BODY_BYTES = 5 * 1024 * 1024


class PayloadGuardMiddleware:
    """
    Usage:
        app.add_middleware(PayloadGuardMiddleware, max_bytes=settings.email_max_body_bytes)
    """

    def __init__(
        self,
        app: ASGIApp,
        max_bytes: Optional[int] = None,
        path_prefixes: Iterable[str] = DEFAULT_GUARDED_PREFIXES,
    ):
        self.app = app
        self.max_bytes = int(max_bytes) if max_bytes else DEFAULT_MAX_BODY_BYTES
        self.path_prefixes = tuple(path_prefixes)

    def _is_guarded(self, path: str) -> bool:
        return any(path == p or path.startswith(p + "/") for p in self.path_prefixes)

    @staticmethod
    def _content_length(scope: Scope) -> Optional[bytes]:
        for name, value in scope.get("headers") or []:
            if name.lower() == b"content-length":
                return value
        return None

    async def _reject(self, scope: Scope, receive: Receive, send: Send, path: str) -> None:
        logger.warning("[PayloadGuard] body > %d bytes rechazado path=%s", self.max_bytes, path)
        response = error_response(413, "payload_too_large", "Payload too large.")
        await response(scope, receive, send)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not self._is_guarded(scope.get("path", "")):
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        raw_length = self._content_length(scope)
        if raw_length is not None:
            try:
                declared = int(raw_length.decode("latin-1").strip())
                if declared < 0:
                    raise ValueError(declared)
            except ValueError:
                response = error_response(400, "bad_request", "Invalid Content-Length header.")
                await response(scope, receive, send)
                return
            if declared > self.max_bytes:
                await self._reject(scope, receive, send, path)
                return

        received = 0
        exceeded = False
        response_started = False

        async def guarded_receive() -> Message:
            nonlocal received, exceeded
            if exceeded:
                return {"type": "http.disconnect"}
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    exceeded = True
                    return {"type": "http.disconnect"}
            return message

        async def guarded_send(message: Message) -> None:
            nonlocal response_started
            # Tras exceder, la respuesta la escribe el middleware
            if exceeded and not response_started:
                return
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, guarded_receive, guarded_send)
        except Exception:
            if not exceeded or response_started:
                raise
            # Lo que levante la app al ver el disconnect queda reemplazado por el 413

        if exceeded and not response_started:
            await self._reject(scope, receive, send, path)


__all__ = ["PayloadGuardMiddleware", "DEFAULT_GUARDED_PREFIXES", "DEFAULT_MAX_BODY_BYTES"]
# Fin del archivo backend/app/shared/middleware/payload_guard.py
