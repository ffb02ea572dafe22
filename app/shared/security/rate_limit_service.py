# -*- coding: utf-8 -*-
"""
backend/app/shared/security/rate_limit_service.py

Rate limiting por ventana fija con Redis como contador compartido y
contador en memoria como respaldo transparente.

Piezas:
- CounterStore: `increment(key, window_ms) -> WindowCount(count, window_start_ms)`
- RedisCounterStore: INCR + PEXPIRE NX + PTTL en un solo MULTI
- InMemoryCounterStore: dict protegido con threading.Lock y reloj inyectable
- RateLimiter: decide allowed/retry_after; si el store primario falla usa
  el respaldo en esa misma llamada, marca el limitador como degradado y no
  vuelve a intentar Redis durante REDIS_RETRY_COOLDOWN_SEC.

Llaves: rl:{endpoint}:{scope}:{identifier}, por ejemplo
- rl:email:ip:203.0.113.7
- rl:email:user:5f0c...
- rl:pdf:user:5f0c...

Autor: InvoiceDesk
Fecha: 2025-12-21
"""

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol

from app.shared.utils.log_throttle import log_once_every, reset_log_key

logger = logging.getLogger(__name__)

# Reloj en milisegundos epoch
Clock = Callable[[], int]

_DEGRADED_LOG_KEY = "rate_limit:primary_store_down"


def system_clock_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class WindowCount:
    """Conteo tras incrementar y el instante (ms) en que abrió la ventana."""
    count: int
    window_start_ms: int


@dataclass(frozen=True)
class RateLimitResult:
    """Resultado de un check; retry_after_seconds es 0 cuando se permite."""
    allowed: bool
    retry_after_seconds: int
    count: int
    limit: int

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.count)


class CounterStore(Protocol):
    async def increment(self, key: str, window_ms: int) -> WindowCount:
        ...


def build_key(endpoint: str, scope: str, identifier: Optional[str]) -> str:
    """Llave normalizada: identificador en minúsculas, 'unknown' si falta."""
    normalized = str(identifier).strip().lower() if identifier else ""
    return f"rl:{endpoint}:{scope}:{normalized or 'unknown'}"


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------

class RedisCounterStore:
    """
    Contador compartido en Redis.

    La ventana abre con el primer request (PEXPIRE ... NX) y la llave
    expira sola al cerrarse; el inicio se deriva de lo que queda de TTL.
    """

    def __init__(self, client, clock: Optional[Clock] = None):
        self.client = client
        self._clock = clock or system_clock_ms

    async def increment(self, key: str, window_ms: int) -> WindowCount:
        async with self.client.pipeline(transaction=True) as pipe:
            pipe.incr(key)
            pipe.pexpire(key, window_ms, nx=True)
            pipe.pttl(key)
            count, _, pttl = await pipe.execute()

        pttl = int(pttl)
        if pttl < 0:
            # Sin TTL (-1) o llave perdida (-2): tratar como ventana recién abierta
            pttl = window_ms
        now = self._clock()
        return WindowCount(count=int(count), window_start_ms=now + pttl - window_ms)


@dataclass
class _MemoryEntry:
    count: int
    window_start_ms: int
    window_ms: int


class InMemoryCounterStore:
    """
    Contador por proceso. Respaldo cuando Redis no está disponible y
    store por defecto sin REDIS_URL.

    - Nueva ventana cuando now - window_start >= window_ms
    - Barrido de entradas vencidas cada `sweep_interval_ms`
    - Como máximo `max_keys` llaves; se descartan primero las ventanas más viejas
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        sweep_interval_ms: int = 60_000,
        max_keys: int = 50_000,
    ):
        self._clock = clock or system_clock_ms
        self.sweep_interval_ms = sweep_interval_ms
        self.max_keys = max_keys
        self._entries: Dict[str, _MemoryEntry] = {}
        self._lock = threading.Lock()
        self._last_sweep_ms = self._clock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _sweep(self, now: int) -> None:
        expired = [k for k, e in self._entries.items() if now - e.window_start_ms >= e.window_ms]
        for k in expired:
            del self._entries[k]
        self._last_sweep_ms = now
        if expired:
            logger.debug("[RateLimit] memoria: %d ventanas vencidas eliminadas", len(expired))

    def _evict_oldest(self) -> None:
        # El dict conserva orden de inserción = orden de apertura de ventana
        while len(self._entries) >= self.max_keys:
            del self._entries[next(iter(self._entries))]

    def increment_sync(self, key: str, window_ms: int) -> WindowCount:
        with self._lock:
            now = self._clock()
            if now - self._last_sweep_ms >= self.sweep_interval_ms:
                self._sweep(now)

            entry = self._entries.get(key)
            if entry is None or now - entry.window_start_ms >= window_ms:
                self._entries.pop(key, None)
                self._evict_oldest()
                entry = _MemoryEntry(count=1, window_start_ms=now, window_ms=window_ms)
                self._entries[key] = entry
            else:
                entry.count += 1
            return WindowCount(count=entry.count, window_start_ms=entry.window_start_ms)

    async def increment(self, key: str, window_ms: int) -> WindowCount:
        return self.increment_sync(key, window_ms)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


# ---------------------------------------------------------------------------
# Limiter
# ---------------------------------------------------------------------------

class RateLimiter:
    """
    Rate limiter de ventana fija con degradación a memoria.

    Un solo intento contra el store primario por request; sin reintentos.
    """

    _instance: Optional["RateLimiter"] = None
    _instance_lock = threading.Lock()

    def __init__(
        self,
        primary: Optional[CounterStore],
        fallback: CounterStore,
        *,
        clock: Optional[Clock] = None,
        retry_cooldown_sec: float = 30.0,
        enabled: bool = True,
    ):
        self.primary = primary
        self.fallback = fallback
        self.enabled = enabled
        self.retry_cooldown_ms = int(retry_cooldown_sec * 1000)
        self._clock = clock or system_clock_ms
        self._degraded = False
        self._skip_primary_until_ms = 0

    # ----- singleton -----
    @classmethod
    def get_instance(cls) -> "RateLimiter":
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls.from_settings()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Solo para tests (p.ej. tras cambiar EMAIL_RATE_LIMIT o REDIS_URL)."""
        with cls._instance_lock:
            cls._instance = None

    @classmethod
    def from_settings(cls, settings=None) -> "RateLimiter":
        from app.shared.config import settings as app_settings
        from app.shared.redis.client import RedisClientManager

        s = settings or app_settings
        client = RedisClientManager.get_instance().get_client()
        primary = RedisCounterStore(client) if client is not None else None
        logger.info(
            "[RateLimit] store=%s enabled=%s cooldown=%ss",
            "redis" if primary else "memory", s.rate_limit_enabled, s.redis_retry_cooldown_sec,
        )
        return cls(
            primary,
            InMemoryCounterStore(),
            retry_cooldown_sec=s.redis_retry_cooldown_sec,
            enabled=s.rate_limit_enabled,
        )

    # ----- estado -----
    @property
    def degraded(self) -> bool:
        return self._degraded

    def _primary_available(self, now: int) -> bool:
        return self.primary is not None and now >= self._skip_primary_until_ms

    def _mark_degraded(self, now: int, error: Exception) -> None:
        self._degraded = True
        self._skip_primary_until_ms = now + self.retry_cooldown_ms
        log_once_every(
            _DEGRADED_LOG_KEY,
            self.retry_cooldown_ms / 1000.0 or 1.0,
            logger,
            logging.WARNING,
            "[RateLimit] store primario no disponible (%s: %s); usando memoria por %ss",
            error.__class__.__name__, error, self.retry_cooldown_ms / 1000.0,
        )

    def _mark_recovered(self) -> None:
        if self._degraded:
            self._degraded = False
            reset_log_key(_DEGRADED_LOG_KEY)
            logger.info("[RateLimit] store primario recuperado")

    async def _increment(self, key: str, window_ms: int) -> WindowCount:
        now = self._clock()
        if self._primary_available(now):
            try:
                result = await self.primary.increment(key, window_ms)
            except Exception as e:
                self._mark_degraded(now, e)
            else:
                self._mark_recovered()
                return result
        return await self.fallback.increment(key, window_ms)

    # ----- API -----
    async def check_and_increment(self, key: str, limit: int, window_ms: int) -> RateLimitResult:
        """Cuenta el request en la ventana de `key` y decide si se permite."""
        if not self.enabled:
            return RateLimitResult(allowed=True, retry_after_seconds=0, count=0, limit=limit)

        window = await self._increment(key, window_ms)
        allowed = window.count <= limit
        retry_after = 0
        if not allowed:
            remaining_ms = window.window_start_ms + window_ms - self._clock()
            retry_after = max(1, math.ceil(remaining_ms / 1000))
        return RateLimitResult(
            allowed=allowed,
            retry_after_seconds=retry_after,
            count=window.count,
            limit=limit,
        )

    async def check(
        self,
        endpoint: str,
        scope: str,
        identifier: Optional[str],
        limit: int,
        window_ms: int,
    ) -> RateLimitResult:
        return await self.check_and_increment(build_key(endpoint, scope, identifier), limit, window_ms)


def get_rate_limiter() -> RateLimiter:
    """Limitador compartido del proceso."""
    return RateLimiter.get_instance()


__all__ = [
    "WindowCount",
    "RateLimitResult",
    "CounterStore",
    "RedisCounterStore",
    "InMemoryCounterStore",
    "RateLimiter",
    "build_key",
    "get_rate_limiter",
    "system_clock_ms",
]
# Fin del archivo backend/app/shared/security/rate_limit_service.py
