# -*- coding: utf-8 -*-
"""
backend/tests/shared/security/test_redis_counter_store.py

RedisCounterStore: INCR + PEXPIRE NX + PTTL en un MULTI, y el inicio de
ventana derivado del TTL restante. Se usa un pipeline falso.

Autor: InvoiceDesk
Creado: 2025-12-24
"""

from app.shared.redis.client import RedisClientManager
from app.shared.security.rate_limit_service import RateLimiter, RedisCounterStore


class FakePipeline:
    def __init__(self, redis):
        self.redis = redis
        self.commands = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    def incr(self, key):
        self.commands.append(("incr", key))

    def pexpire(self, key, ms, nx=False):
        self.commands.append(("pexpire", key, ms, nx))

    def pttl(self, key):
        self.commands.append(("pttl", key))

    async def execute(self):
        self.redis.executed.append(self.commands)
        return self.redis.reply


class FakeRedis:
    def __init__(self, reply):
        self.reply = reply
        self.executed = []
        self.transactions = []

    def pipeline(self, transaction=True):
        self.transactions.append(transaction)
        return FakePipeline(self)


async def test_increment_runs_single_transaction():
    redis = FakeRedis(reply=[3, False, 400_000])
    store = RedisCounterStore(redis, clock=lambda: 1_000_000)

    window = await store.increment("rl:email:ip:x", 600_000)

    assert redis.transactions == [True]
    assert redis.executed == [[
        ("incr", "rl:email:ip:x"),
        ("pexpire", "rl:email:ip:x", 600_000, True),
        ("pttl", "rl:email:ip:x"),
    ]]
    assert window.count == 3
    # quedan 400s de 600s → la ventana abrió hace 200s
    assert window.window_start_ms == 1_000_000 - 200_000


async def test_missing_ttl_counts_as_fresh_window():
    redis = FakeRedis(reply=[1, True, -1])
    store = RedisCounterStore(redis, clock=lambda: 5_000)

    window = await store.increment("k", 60_000)
    assert window.window_start_ms == 5_000


def test_limiter_from_settings_without_redis_url_uses_memory():
    limiter = RateLimiter.from_settings()
    assert limiter.primary is None


def test_limiter_from_settings_with_redis_url(monkeypatch):
    from app.shared.config.config_loader import get_settings

    monkeypatch.setenv("REDIS_URL", "redis://127.0.0.1:1/0")
    get_settings.cache_clear()
    RedisClientManager.reset_instance()

    limiter = RateLimiter.from_settings()
    assert isinstance(limiter.primary, RedisCounterStore)

# Fin del archivo backend/tests/shared/security/test_redis_counter_store.py
