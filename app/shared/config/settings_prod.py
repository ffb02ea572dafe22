# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_prod.py

Overrides para entorno de PRODUCCIÓN.
Solo variables de entorno / secret stores, logging JSON y SSL requerido.

Autor: InvoiceDesk
Fecha: 2025-12-20
"""

from typing import Literal
from .settings_base import BaseAppSettings
from pydantic_settings import SettingsConfigDict


class ProdSettings(BaseAppSettings):
    python_env: Literal["development", "test", "production"] = "production"

    # Usa el mismo tipo Literal que BaseAppSettings para override correcto
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "pretty", "plain"] = "json"

    db_sslmode: Literal["disable", "prefer", "require"] = "require"

    model_config = SettingsConfigDict(
        env_file=None,  # No leemos .env en producción
        extra="ignore",
    )


__all__ = ["ProdSettings"]
# Fin del archivo backend/app/shared/config/settings_prod.py
