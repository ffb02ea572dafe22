# -*- coding: utf-8 -*-
"""
backend/tests/shared/security/test_rate_limit_service.py

RateLimiter de ventana fija:
- EMAIL_RATE_LIMIT=10: requests 1..10 pasan, el 11 se rechaza con retry_after
- La ventana se reinicia al vencer
- Store primario caído → respaldo en memoria en la misma llamada, estado
  degradado y cooldown antes de reintentar
- RATE_LIMIT_ENABLED=false deja pasar todo

Autor: InvoiceDesk
Creado: 2025-12-24
"""

import pytest

from app.shared.security.rate_limit_service import (
    InMemoryCounterStore,
    RateLimiter,
    WindowCount,
    build_key,
)

WINDOW_MS = 600_000


class FakeClock:
    def __init__(self, now_ms: int = 1_700_000_000_000):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


class FlakyStore:
    """Store primario que falla mientras `down` sea True."""

    def __init__(self, clock):
        self.down = False
        self.calls = 0
        self._inner = InMemoryCounterStore(clock=clock)

    async def increment(self, key: str, window_ms: int) -> WindowCount:
        self.calls += 1
        if self.down:
            raise ConnectionError("redis unreachable")
        return await self._inner.increment(key, window_ms)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return RateLimiter(None, InMemoryCounterStore(clock=clock), clock=clock)


class TestFixedWindow:
    async def test_eleventh_request_is_rejected(self, limiter):
        key = build_key("email", "ip", "203.0.113.7")
        results = [await limiter.check_and_increment(key, 10, WINDOW_MS) for _ in range(11)]

        assert all(r.allowed for r in results[:10])
        assert all(r.retry_after_seconds == 0 for r in results[:10])
        assert results[10].allowed is False
        assert 0 < results[10].retry_after_seconds <= WINDOW_MS // 1000

    async def test_retry_after_shrinks_with_time(self, limiter, clock):
        key = "rl:email:user:u1"
        for _ in range(2):
            await limiter.check_and_increment(key, 1, WINDOW_MS)
        clock.advance(540_000)
        result = await limiter.check_and_increment(key, 1, WINDOW_MS)

        assert result.allowed is False
        assert result.retry_after_seconds == 60

    async def test_window_resets(self, limiter, clock):
        key = "rl:email:user:u1"
        for _ in range(11):
            await limiter.check_and_increment(key, 10, WINDOW_MS)

        clock.advance(WINDOW_MS)
        result = await limiter.check_and_increment(key, 10, WINDOW_MS)
        assert result.allowed is True
        assert result.count == 1

    async def test_keys_are_independent(self, limiter):
        await limiter.check_and_increment("rl:email:ip:a", 1, WINDOW_MS)
        result = await limiter.check_and_increment("rl:email:ip:b", 1, WINDOW_MS)
        assert result.allowed is True

    async def test_disabled_allows_everything(self, clock):
        limiter = RateLimiter(None, InMemoryCounterStore(clock=clock), clock=clock, enabled=False)
        for _ in range(50):
            result = await limiter.check_and_increment("rl:email:ip:x", 1, WINDOW_MS)
        assert result.allowed is True


class TestFallback:
    async def test_primary_failure_uses_memory_same_call(self, clock):
        primary = FlakyStore(clock)
        primary.down = True
        limiter = RateLimiter(primary, InMemoryCounterStore(clock=clock), clock=clock, retry_cooldown_sec=30)

        result = await limiter.check_and_increment("rl:email:ip:x", 10, WINDOW_MS)

        assert result.allowed is True
        assert result.count == 1
        assert limiter.degraded is True

    async def test_fallback_still_enforces_limit(self, clock):
        primary = FlakyStore(clock)
        primary.down = True
        limiter = RateLimiter(primary, InMemoryCounterStore(clock=clock), clock=clock)

        results = [await limiter.check_and_increment("rl:email:ip:x", 10, WINDOW_MS) for _ in range(11)]
        assert results[-1].allowed is False

    async def test_cooldown_skips_primary_then_recovers(self, clock):
        primary = FlakyStore(clock)
        primary.down = True
        limiter = RateLimiter(primary, InMemoryCounterStore(clock=clock), clock=clock, retry_cooldown_sec=30)

        await limiter.check_and_increment("rl:email:ip:x", 10, WINDOW_MS)
        await limiter.check_and_increment("rl:email:ip:x", 10, WINDOW_MS)
        assert primary.calls == 1

        primary.down = False
        clock.advance(30_000)
        await limiter.check_and_increment("rl:email:ip:x", 10, WINDOW_MS)

        assert primary.calls == 2
        assert limiter.degraded is False


def test_build_key_normalizes_identifier():
    assert build_key("email", "user", " ABC ") == "rl:email:user:abc"
    assert build_key("pdf", "ip", None) == "rl:pdf:ip:unknown"


def test_memory_store_evicts_oldest(clock):
    store = InMemoryCounterStore(clock=clock, max_keys=2)
    store.increment_sync("a", WINDOW_MS)
    store.increment_sync("b", WINDOW_MS)
    store.increment_sync("c", WINDOW_MS)
    assert len(store) == 2
    assert store.increment_sync("a", WINDOW_MS).count == 1


def test_memory_store_sweeps_expired(clock):
    store = InMemoryCounterStore(clock=clock, sweep_interval_ms=1_000)
    store.increment_sync("a", 500)
    clock.advance(1_000)
    store.increment_sync("b", WINDOW_MS)
    assert len(store) == 1

# Fin del archivo backend/tests/shared/security/test_rate_limit_service.py
