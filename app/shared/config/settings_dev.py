# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_dev.py

Overrides para entorno de DESARROLLO local.
Logging verboso, sin SSL hacia Postgres y emails a consola.

Autor: InvoiceDesk
Fecha: 2025-12-20
"""

from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class DevSettings(BaseAppSettings):
    """Configuración para entorno de desarrollo."""

    python_env: str = "development"

    log_level: str = "DEBUG"
    log_format: str = "plain"

    # En local no se requiere SSL
    db_sslmode: str = "disable"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["DevSettings"]

# Fin del archivo backend/app/shared/config/settings_dev.py
