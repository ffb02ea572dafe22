# -*- coding: utf-8 -*-
"""
backend/app/core/logging.py

Fachada de logging sobre `app.shared.config.logging_config`.

Autor: InvoiceDesk
Fecha: 2025-12-20
"""

from typing import Literal

from app.shared.config.logging_config import setup_logging as _setup_logging


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO",
    fmt: Literal["plain", "pretty", "json"] = "plain",
) -> None:
    _setup_logging(level=level, fmt=fmt)


def setup_logging_from_settings(settings) -> None:
    """LOG_LEVEL / LOG_FORMAT del settings activo."""
    _setup_logging(level=settings.log_level, fmt=settings.log_format)


__all__ = ["setup_logging", "setup_logging_from_settings"]
# Fin del archivo backend/app/core/logging.py
