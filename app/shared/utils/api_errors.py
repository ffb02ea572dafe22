# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/api_errors.py

Errores HTTP con envelope estable:

    {"ok": false, "error": {"code": "<código>", "message": "<texto>", ...extras}}

ApiError extiende HTTPException para que FastAPI lo trate como tal; el
handler registrado en main.py lo renderiza con error_envelope().

Autor: InvoiceDesk
Fecha: 2025-12-21
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

# Código por defecto cuando un HTTPException genérico no trae uno propio
STATUS_CODE_NAMES: Dict[int, str] = {
    400: "bad_request",
    401: "NOT_AUTHENTICATED",
    403: "FORBIDDEN",
    404: "not_found",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    413: "payload_too_large",
    422: "VALIDATION",
    429: "RATE_LIMIT",
    500: "INTERNAL_SERVER_ERROR",
    501: "NOT_IMPLEMENTED",
    502: "BAD_GATEWAY",
    503: "SERVICE_UNAVAILABLE",
}


def code_for_status(status_code: int) -> str:
    return STATUS_CODE_NAMES.get(status_code, f"HTTP_{status_code}")


def error_envelope(code: str, message: str, **extras: Any) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    error.update({k: v for k, v in extras.items() if v is not None})
    return {"ok": False, "error": error}


class ApiError(HTTPException):
    """HTTPException con `code` estable, `message` y campos extra en el envelope."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        headers: Optional[Dict[str, str]] = None,
        **extras: Any,
    ):
        self.code = code
        self.message = message
        self.extras = extras
        super().__init__(status_code=status_code, detail=message, headers=headers)

    def to_content(self) -> Dict[str, Any]:
        return error_envelope(self.code, self.message, **self.extras)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(status_code={self.status_code}, code={self.code!r})"


def api_error_from_domain(exc: Exception) -> ApiError:
    """Traduce una excepción de dominio (con `code`, `status_code`, `message`) al envelope."""
    return ApiError(
        getattr(exc, "status_code", status.HTTP_500_INTERNAL_SERVER_ERROR),
        getattr(exc, "code", "INTERNAL_SERVER_ERROR"),
        getattr(exc, "message", None) or str(exc),
    )


def bad_request(code: str = "bad_request", message: str = "Bad request.") -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, code, message)


def not_found(code: str = "not_found", message: str = "Not found.") -> ApiError:
    return ApiError(status.HTTP_404_NOT_FOUND, code, message)


def not_authenticated(message: str = "Not authenticated.") -> ApiError:
    return ApiError(
        status.HTTP_401_UNAUTHORIZED,
        "NOT_AUTHENTICATED",
        message,
        headers={"WWW-Authenticate": "Bearer"},
    )


__all__ = [
    "ApiError",
    "STATUS_CODE_NAMES",
    "code_for_status",
    "error_envelope",
    "api_error_from_domain",
    "bad_request",
    "not_found",
    "not_authenticated",
]
# Fin del archivo backend/app/shared/utils/api_errors.py
