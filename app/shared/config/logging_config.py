# -*- coding: utf-8 -*-
"""
backend/app/shared/config/logging_config.py

Configuración centralizada de logging para InvoiceDesk.
Formato plain/pretty en desarrollo y JSON (python-json-logger) en producción.

Autor: InvoiceDesk
Fecha: 2025-12-20
"""

import logging.config
from typing import Literal

JSON_FORMATTER_PATH = "pythonjsonlogger.json.JsonFormatter"

# Librerías ruidosas que bajamos a WARNING salvo en DEBUG
_QUIET_LOGGERS = ("httpx", "httpcore", "asyncio", "sqlalchemy.engine")


def build_logging_config(
    level: str = "INFO",
    fmt: str = "plain",
) -> dict:
    """Construye el dict para logging.config.dictConfig."""
    level = level.upper()
    use_json = fmt == "json"

    formatters = {
        "default": {
            "format": "%(levelname)s [%(name)s]: %(message)s",
        },
        "pretty": {
            "format": "%(asctime)s %(levelname)-8s [%(name)s]: %(message)s",
            "datefmt": "%H:%M:%S",
        },
        "json": {
            "()": JSON_FORMATTER_PATH,
            "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
        },
    }

    formatter = "json" if use_json else ("pretty" if fmt == "pretty" else "default")
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": formatter,
            "stream": "ext://sys.stdout",
        }
    }

    quiet_level = level if level == "DEBUG" else "WARNING"
    loggers = {
        name: {"level": quiet_level, "propagate": True}
        for name in _QUIET_LOGGERS
    }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": handlers,
        "loggers": loggers,
        "root": {
            "handlers": ["console"],
            "level": level,
        },
    }


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO",
    fmt: Literal["plain", "pretty", "json"] = "plain"
) -> None:
    """
    Configura el sistema de logging de la aplicación.

    Ejemplos:
        >>> setup_logging("INFO", "plain")
        >>> setup_logging("WARNING", "json")
    """
    logging.config.dictConfig(build_logging_config(level, fmt))


__all__ = ["setup_logging", "build_logging_config", "JSON_FORMATTER_PATH"]
# Fin del archivo backend/app/shared/config/logging_config.py
