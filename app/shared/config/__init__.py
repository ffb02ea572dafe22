# -*- coding: utf-8 -*-
"""
backend/app/shared/config/__init__.py

Punto único de acceso a la configuración:
    from app.shared.config import settings

`settings` es un proxy perezoso sobre get_settings(): no instancia nada al
importar y respeta get_settings.cache_clear() en tests.
"""

from typing import Any

from .config_loader import get_settings
from .settings_base import BaseAppSettings


class _SettingsProxy:
    __slots__ = ()

    def __getattr__(self, name: str) -> Any:
        return getattr(get_settings(), name)

    def __repr__(self) -> str:
        return f"<settings proxy for {type(get_settings()).__name__}>"


settings = _SettingsProxy()

__all__ = ["settings", "get_settings", "BaseAppSettings"]
# Fin del archivo backend/app/shared/config/__init__.py
