# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/services/pdf_download_token_service.py

Links de descarga de PDF de un solo uso.

- El cliente recibe un token aleatorio; solo se guarda su SHA-256
- Redis: SET pdfdl:<hash> <json> PX <ttl>; consumo con MULTI GET + DEL,
  así dos descargas simultáneas no pueden usar el mismo token
- Sin REDIS_URL o con Redis caído: dict en memoria con expiración y
  barrido periódico (mismo cooldown que el RateLimiter)

Autor: InvoiceDesk
Fecha: 2025-12-26
"""

import hashlib
import json
import logging
import secrets
import threading
from dataclasses import asdict, dataclass
from typing import Dict, Optional, Tuple

from redis.exceptions import RedisError

from app.shared.security.rate_limit_service import Clock, system_clock_ms
from app.shared.utils.log_throttle import log_once_every

logger = logging.getLogger(__name__)

TOKEN_KEY_PREFIX = "pdfdl:"
MIN_TOKEN_TTL_MS = 30_000
SWEEP_INTERVAL_MS = 60_000

_REDIS_DOWN_LOG_KEY = "pdf_download:redis_down"


def generate_download_token() -> str:
    return secrets.token_urlsafe(32)


def hash_download_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class PdfDownloadGrant:
    """Lo que un token autoriza a descargar."""
    user_id: str
    doc_type: str
    doc_id: str

    def to_json(self) -> str:
        return json.dumps(asdict(self), separators=(",", ":"))

    @classmethod
    def from_json(cls, raw) -> Optional["PdfDownloadGrant"]:
        try:
            data = json.loads(raw)
        except (TypeError, ValueError):
            return None
        if not isinstance(data, dict):
            return None
        values = [str(data.get(k) or "") for k in ("user_id", "doc_type", "doc_id")]
        if not all(values):
            return None
        return cls(*values)


class InMemoryPdfTokenStore:
    """Tokens por proceso: hash → (grant, expires_at_ms)."""

    def __init__(self, clock: Optional[Clock] = None, sweep_interval_ms: int = SWEEP_INTERVAL_MS):
        self._clock = clock or system_clock_ms
        self.sweep_interval_ms = sweep_interval_ms
        self._entries: Dict[str, Tuple[PdfDownloadGrant, int]] = {}
        self._lock = threading.Lock()
        self._last_sweep_ms = self._clock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _maybe_sweep(self, now: int) -> None:
        if now - self._last_sweep_ms < self.sweep_interval_ms:
            return
        expired = [k for k, (_, expires_at) in self._entries.items() if expires_at <= now]
        for k in expired:
            del self._entries[k]
        self._last_sweep_ms = now

    def put(self, token_hash: str, grant: PdfDownloadGrant, ttl_ms: int) -> None:
        with self._lock:
            now = self._clock()
            self._maybe_sweep(now)
            self._entries[token_hash] = (grant, now + ttl_ms)

    def pop(self, token_hash: str) -> Optional[PdfDownloadGrant]:
        with self._lock:
            now = self._clock()
            self._maybe_sweep(now)
            entry = self._entries.pop(token_hash, None)
        if entry is None:
            return None
        grant, expires_at = entry
        return grant if expires_at > now else None


class PdfDownloadTokenService:
    """Emite y consume tokens de descarga; Redis si está, memoria si no."""

    _instance: Optional["PdfDownloadTokenService"] = None
    _instance_lock = threading.Lock()

    def __init__(
        self,
        client=None,
        memory: Optional[InMemoryPdfTokenStore] = None,
        *,
        ttl_ms: int = 180_000,
        clock: Optional[Clock] = None,
        retry_cooldown_sec: float = 30.0,
    ):
        self.client = client
        self._clock = clock or system_clock_ms
        self.memory = memory or InMemoryPdfTokenStore(clock=self._clock)
        self.ttl_ms = max(MIN_TOKEN_TTL_MS, int(ttl_ms))
        self.retry_cooldown_ms = int(retry_cooldown_sec * 1000)
        self._skip_redis_until_ms = 0

    @classmethod
    def get_instance(cls) -> "PdfDownloadTokenService":
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls.from_settings()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        with cls._instance_lock:
            cls._instance = None

    @classmethod
    def from_settings(cls, settings=None) -> "PdfDownloadTokenService":
        from app.shared.config import settings as app_settings
        from app.shared.redis.client import RedisClientManager

        s = settings or app_settings
        return cls(
            RedisClientManager.get_instance().get_client(),
            ttl_ms=s.pdf_download_token_ttl_ms,
            retry_cooldown_sec=s.redis_retry_cooldown_sec,
        )

    def _redis_available(self) -> bool:
        return self.client is not None and self._clock() >= self._skip_redis_until_ms

    def _mark_redis_down(self, error: Exception) -> None:
        self._skip_redis_until_ms = self._clock() + self.retry_cooldown_ms
        log_once_every(
            _REDIS_DOWN_LOG_KEY,
            self.retry_cooldown_ms / 1000.0 or 1.0,
            logger,
            logging.WARNING,
            "[PdfDownload] Redis no disponible (%s: %s); tokens en memoria",
            error.__class__.__name__, error,
        )

    async def issue(self, user_id: str, doc_type: str, doc_id: str) -> str:
        """Crea un token para (usuario, documento) y devuelve el valor en claro."""
        token = generate_download_token()
        token_hash = hash_download_token(token)
        grant = PdfDownloadGrant(user_id=str(user_id), doc_type=str(doc_type), doc_id=str(doc_id))

        if self._redis_available():
            try:
                await self.client.set(TOKEN_KEY_PREFIX + token_hash, grant.to_json(), px=self.ttl_ms)
                return token
            except (RedisError, OSError) as e:
                self._mark_redis_down(e)

        self.memory.put(token_hash, grant, self.ttl_ms)
        return token

    async def consume(self, token: Optional[str]) -> Optional[PdfDownloadGrant]:
        """Grant del token, o None si no existe, venció o ya se usó."""
        if not token:
            return None
        token_hash = hash_download_token(token)

        if self._redis_available():
            key = TOKEN_KEY_PREFIX + token_hash
            try:
                async with self.client.pipeline(transaction=True) as pipe:
                    pipe.get(key)
                    pipe.delete(key)
                    raw, _ = await pipe.execute()
            except (RedisError, OSError) as e:
                self._mark_redis_down(e)
            else:
                if raw:
                    return PdfDownloadGrant.from_json(raw)
                # Emitido en memoria mientras Redis estaba caído
                return self.memory.pop(token_hash)

        return self.memory.pop(token_hash)


def get_pdf_download_tokens() -> PdfDownloadTokenService:
    return PdfDownloadTokenService.get_instance()


__all__ = [
    "PdfDownloadGrant",
    "PdfDownloadTokenService",
    "InMemoryPdfTokenStore",
    "generate_download_token",
    "hash_download_token",
    "get_pdf_download_tokens",
    "TOKEN_KEY_PREFIX",
    "MIN_TOKEN_TTL_MS",
]
# Fin del archivo backend/app/modules/documents/services/pdf_download_token_service.py
