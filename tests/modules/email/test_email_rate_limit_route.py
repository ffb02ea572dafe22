# -*- coding: utf-8 -*-
"""
backend/tests/modules/email/test_email_rate_limit_route.py

Rate limit de POST /api/email:
- EMAIL_RATE_LIMIT=10 → el request 11 devuelve 429 con Retry-After y
  error.retryAfterSeconds
- Alcance ip / user según EMAIL_RATE_KEY_SCOPE
- REDIS_URL inalcanzable → contadores en memoria, sin 500

Autor: InvoiceDesk
Creado: 2025-12-24
"""

import pytest

from app.shared.config.config_loader import get_settings
from app.shared.redis.client import RedisClientManager
from app.shared.security.rate_limit_service import RateLimiter, get_rate_limiter


def _reconfigure(monkeypatch, **env):
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()
    RateLimiter.reset_instance()
    RedisClientManager.reset_instance()


async def _post_many(client, headers, body, n):
    return [await client.post("/api/email", headers=headers, json=body) for _ in range(n)]


@pytest.fixture
def body(invoice_id, identity_id):
    # Sin `to`: cada request termina en 400 después de contar en el limitador
    return {"docId": invoice_id, "type": "invoice", "subject": "Rechnung", "senderIdentityId": identity_id}


async def test_eleventh_request_is_limited(async_client, auth_headers, body, monkeypatch):
    _reconfigure(monkeypatch, EMAIL_RATE_LIMIT="10")

    responses = await _post_many(async_client, auth_headers, body, 11)

    assert [r.status_code for r in responses[:10]] == [400] * 10
    limited = responses[10]
    assert limited.status_code == 429
    error = limited.json()["error"]
    assert error["code"] == "RATE_LIMIT"
    assert error["retryAfterSeconds"] > 0
    assert int(limited.headers["Retry-After"]) == error["retryAfterSeconds"]


async def test_ip_limit_applies_before_auth(async_client, body, monkeypatch):
    _reconfigure(monkeypatch, EMAIL_RATE_LIMIT="2", EMAIL_RATE_KEY_SCOPE="ip")

    responses = await _post_many(async_client, {}, body, 3)

    assert [r.status_code for r in responses] == [401, 401, 429]


async def test_user_scope_ignores_ip(async_client, auth_headers, body, monkeypatch):
    _reconfigure(monkeypatch, EMAIL_RATE_LIMIT="2", EMAIL_RATE_KEY_SCOPE="user")

    anonymous = await _post_many(async_client, {}, body, 3)
    assert [r.status_code for r in anonymous] == [401, 401, 401]

    authed = await _post_many(async_client, auth_headers, body, 3)
    assert [r.status_code for r in authed] == [400, 400, 429]


async def test_disabled_rate_limit(async_client, auth_headers, body, monkeypatch):
    _reconfigure(monkeypatch, EMAIL_RATE_LIMIT="1", RATE_LIMIT_ENABLED="false")

    responses = await _post_many(async_client, auth_headers, body, 3)
    assert all(r.status_code == 400 for r in responses)


async def test_unreachable_redis_falls_back_to_memory(async_client, auth_headers, body, monkeypatch):
    _reconfigure(
        monkeypatch,
        REDIS_URL="redis://127.0.0.1:1/0",
        REDIS_SOCKET_TIMEOUT_MS="100",
        EMAIL_RATE_LIMIT="2",
    )

    responses = await _post_many(async_client, auth_headers, body, 3)

    assert [r.status_code for r in responses] == [400, 400, 429]
    assert get_rate_limiter().degraded is True

# Fin del archivo backend/tests/modules/email/test_email_rate_limit_route.py
