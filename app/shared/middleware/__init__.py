# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/__init__.py

Módulo de middlewares compartidos.
"""

from .payload_guard import PayloadGuardMiddleware, DEFAULT_GUARDED_PREFIXES
from .exception_handler import JSONExceptionMiddleware, get_request_id
from .request_logging import RequestLoggingMiddleware

__all__ = [
    "PayloadGuardMiddleware",
    "DEFAULT_GUARDED_PREFIXES",
    "JSONExceptionMiddleware",
    "get_request_id",
    "RequestLoggingMiddleware",
]
