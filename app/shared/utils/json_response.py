# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/json_response.py

Respuestas JSON con charset UTF-8 explícito.

    app = FastAPI(default_response_class=UTF8JSONResponse)

Los mensajes en alemán ("Fällig", "Gültig bis") llegan sin mojibake aunque
el cliente/proxy no asuma UTF-8.

Autor: InvoiceDesk
Fecha: 2025-12-21
"""

from typing import Any, Dict, Optional
from fastapi.responses import JSONResponse

from app.shared.utils.api_errors import error_envelope


class UTF8JSONResponse(JSONResponse):
    media_type = "application/json; charset=utf-8"


def json_response_utf8(
    content: Any,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
) -> UTF8JSONResponse:
    return UTF8JSONResponse(content=content, status_code=status_code, headers=headers)


def error_response(
    status_code: int,
    code: str,
    message: str,
    headers: Optional[Dict[str, str]] = None,
    **extras: Any,
) -> UTF8JSONResponse:
    """Respuesta con el envelope de error estándar."""
    return UTF8JSONResponse(
        content=error_envelope(code, message, **extras),
        status_code=status_code,
        headers=headers,
    )


__all__ = ["UTF8JSONResponse", "json_response_utf8", "error_response"]
