# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_testing.py

Overrides para entorno de PRUEBAS.
Determinista: sin Redis por defecto (contadores en memoria), emails stub
y un secreto JWT fijo para firmar tokens en los tests.

Autor: InvoiceDesk
Fecha: 2025-12-20
"""

from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class EnvTestingSettings(BaseAppSettings):
    python_env: str = "test"

    log_level: str = "WARNING"
    log_format: str = "pretty"

    db_name: str = "invoicedesk_test"
    db_sslmode: str = "disable"

    # Con alias: los tests pueden sobreescribir vía monkeypatch.setenv
    jwt_secret_key: SecretStr = Field(
        default=SecretStr("test-secret-key-for-invoicedesk-0123456789"),
        validation_alias="JWT_SECRET_KEY",
    )
    email_from: Optional[str] = Field(default="noreply@invoicedesk.test", validation_alias="EMAIL_FROM")

    model_config = SettingsConfigDict(
        env_file=".env.test",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["EnvTestingSettings"]
# Fin del archivo backend/app/shared/config/settings_testing.py
