# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/__init__.py

Utilidades comunes: envelope de errores, respuestas JSON, logging throttled.

Autor: InvoiceDesk
Fecha: 2025-12-21
"""

from .api_errors import ApiError, api_error_from_domain, error_envelope, code_for_status
from .json_response import UTF8JSONResponse, json_response_utf8, error_response
from .log_throttle import log_once_every, should_log_once_every
from .validators import validate_uuid

__all__ = [
    "ApiError",
    "api_error_from_domain",
    "error_envelope",
    "code_for_status",
    "UTF8JSONResponse",
    "json_response_utf8",
    "error_response",
    "log_once_every",
    "should_log_once_every",
    "validate_uuid",
]
