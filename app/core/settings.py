# -*- coding: utf-8 -*-
"""
backend/app/core/settings.py

Fachada de configuración: settings de Pydantic v2 según PYTHON_ENV.

Autor: InvoiceDesk
Fecha: 2025-12-20
"""

from typing import cast

from app.shared.config.config_loader import get_settings as _get_settings
from app.shared.config.settings_base import BaseAppSettings


def get_settings() -> BaseAppSettings:
    """Configuración global (dev / test / prod, cacheada)."""
    return cast(BaseAppSettings, _get_settings())


__all__ = ["get_settings"]
