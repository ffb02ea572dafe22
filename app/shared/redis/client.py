# -*- coding: utf-8 -*-
"""
backend/app/shared/redis/client.py

Cliente async de Redis compartido (singleton) para InvoiceDesk.
Lo usa el RateLimiter como contador compartido entre procesos.

- Creación perezosa: from_url no abre conexiones; la primera orden conecta.
- Timeouts cortos (REDIS_SOCKET_TIMEOUT_MS): un Redis caído debe fallar
  rápido para que el limitador caiga a memoria sin frenar el request.
- No cachea fallos: el cooldown tras un error lo decide el RateLimiter.

Autor: InvoiceDesk
Fecha: 2025-12-21
"""

import inspect
import logging
import os
from typing import Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from app.shared.config import settings

logger = logging.getLogger(__name__)


class RedisClientManager:
    """Maneja un único cliente async de Redis por proceso."""

    _instance: Optional["RedisClientManager"] = None

    @classmethod
    def get_instance(cls) -> "RedisClientManager":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Solo para tests: no cierra el cliente (ver reset_instance_async)."""
        cls._instance = None

    @classmethod
    async def reset_instance_async(cls) -> None:
        if cls._instance is not None:
            await cls._instance.close()
        cls._instance = None

    def __init__(self, redis_url: Optional[str] = None, socket_timeout_ms: Optional[int] = None):
        self._redis_url = redis_url if redis_url is not None else settings.redis_url
        timeout_ms = socket_timeout_ms if socket_timeout_ms is not None else settings.redis_socket_timeout_ms
        self._socket_timeout = timeout_ms / 1000.0
        self._client: Optional[aioredis.Redis] = None

        if self._redis_url:
            logger.debug("[Redis] configurado (lazy connect) pid=%d", os.getpid())
        else:
            logger.debug("[Redis] REDIS_URL no configurado pid=%d", os.getpid())

    @property
    def is_configured(self) -> bool:
        return bool(self._redis_url)

    def get_client(self) -> Optional[aioredis.Redis]:
        """Cliente Redis o None si no hay REDIS_URL. No hace I/O."""
        if not self.is_configured:
            return None
        if self._client is None:
            self._client = aioredis.from_url(
                self._redis_url,
                decode_responses=True,
                socket_connect_timeout=self._socket_timeout,
                socket_timeout=self._socket_timeout,
            )
        return self._client

    async def ping(self) -> bool:
        client = self.get_client()
        if client is None:
            return False
        try:
            return bool(await client.ping())
        except (RedisError, OSError) as e:
            logger.warning("[Redis] ping falló: %s", e)
            return False

    async def close(self) -> None:
        if self._client is None:
            return
        try:
            close_method = getattr(self._client, "aclose", None) or self._client.close
            result = close_method()
            if inspect.isawaitable(result):
                await result
        except (RedisError, OSError) as e:
            logger.warning("[Redis] error al cerrar: %s", e)
        finally:
            self._client = None


def get_async_redis_client() -> Optional[aioredis.Redis]:
    return RedisClientManager.get_instance().get_client()


async def close_async_redis_client() -> None:
    await RedisClientManager.get_instance().close()


__all__ = [
    "get_async_redis_client",
    "close_async_redis_client",
    "RedisClientManager",
]
# Fin del archivo backend/app/shared/redis/client.py
