# -*- coding: utf-8 -*-
"""
backend/app/shared/config/config_loader.py

Selecciona la clase de settings según PYTHON_ENV, ejecuta las
validaciones de seguridad y cachea la instancia.

Autor: InvoiceDesk
Fecha: 2025-12-20
"""

from functools import lru_cache
import os
from .settings_base import BaseAppSettings
from .settings_dev import DevSettings
from .settings_testing import EnvTestingSettings
from .settings_prod import ProdSettings


_ENV_CLASSES = {
    "production": ProdSettings,
    "test": EnvTestingSettings,
    "development": DevSettings,
}


@lru_cache(maxsize=1)
def get_settings() -> BaseAppSettings:
    """
    Devuelve la configuración del entorno actual (singleton).

    Tests: tras monkeypatch.setenv(...) llamar get_settings.cache_clear().

    Raises:
        ValueError: Si las validaciones de seguridad fallan
    """
    env = os.getenv("PYTHON_ENV", "development").lower()
    settings_cls = _ENV_CLASSES.get(env, DevSettings)
    settings = settings_cls()
    settings._security_checks()
    return settings


__all__ = ["get_settings"]
# Fin del archivo backend/app/shared/config/config_loader.py
