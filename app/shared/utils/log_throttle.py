# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/log_throttle.py

Logging con límite de frecuencia: evita inundar los logs cuando una
dependencia (Redis, proveedor de email) falla en cada request.

    log_once_every("rate_limit:redis_down", 60, logger, logging.WARNING,
                   "Redis no disponible: %s", err)

Autor: InvoiceDesk
Fecha: 2025-12-21
"""
import logging
import threading
import time
from typing import Any

_log_cache: dict[str, float] = {}
_log_cache_lock = threading.Lock()

_MAX_CACHE_SIZE = 10000


def _trim_cache() -> None:
    # Conserva la mitad más reciente
    if len(_log_cache) <= _MAX_CACHE_SIZE:
        return
    for key in sorted(_log_cache, key=_log_cache.__getitem__)[: _MAX_CACHE_SIZE // 2]:
        del _log_cache[key]


def should_log_once_every(key: str, seconds: float) -> bool:
    """True como máximo una vez cada `seconds` para la misma llave (reloj monotónico)."""
    now = time.monotonic()
    with _log_cache_lock:
        last = _log_cache.get(key)
        if last is not None and (now - last) < seconds:
            return False
        _log_cache[key] = now
        _trim_cache()
        return True


def log_once_every(
    key: str,
    seconds: float,
    logger: logging.Logger,
    level: int,
    msg: str,
    *args: Any,
    **kwargs: Any,
) -> bool:
    """Emite el log si no se emitió otro con la misma llave en `seconds`. Devuelve si se emitió."""
    if not should_log_once_every(key, seconds):
        return False
    logger.log(level, msg, *args, **kwargs)
    return True


def reset_log_key(key: str) -> None:
    """Permite que el siguiente log con `key` salga de inmediato (p.ej. tras recuperarse)."""
    with _log_cache_lock:
        _log_cache.pop(key, None)


__all__ = ["should_log_once_every", "log_once_every", "reset_log_key"]
# Fin del archivo backend/app/shared/utils/log_throttle.py
