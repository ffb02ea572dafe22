# -*- coding: utf-8 -*-
"""
backend/tests/shared/middleware/test_payload_guard.py

PayloadGuardMiddleware:
- Content-Length declarado > límite → 413 y la app no se invoca
- Body chunked que pasa el límite → 413
- Content-Length inválido → 400
- Rutas no protegidas pasan intactas

Autor: InvoiceDesk
Creado: 2025-12-24
"""

import httpx
import pytest
from fastapi import FastAPI, Request

from app.shared.middleware import PayloadGuardMiddleware

MAX_BYTES = 1024


@pytest.fixture
def calls():
    return []


@pytest.fixture
def guarded_app(calls):
    app = FastAPI()

    @app.post("/api/email")
    async def email(request: Request):
        body = await request.body()
        calls.append(len(body))
        return {"ok": True, "size": len(body)}

    @app.post("/api/other")
    async def other(request: Request):
        body = await request.body()
        calls.append(len(body))
        return {"ok": True, "size": len(body)}

    app.add_middleware(PayloadGuardMiddleware, max_bytes=MAX_BYTES, path_prefixes=("/api/email",))
    return app


@pytest.fixture
async def client(guarded_app):
    transport = httpx.ASGITransport(app=guarded_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


async def test_small_body_passes(client, calls):
    resp = await client.post("/api/email", content=b"x" * 100)
    assert resp.status_code == 200
    assert resp.json()["size"] == 100
    assert calls == [100]


async def test_declared_length_over_limit_rejected_before_app(client, calls):
    resp = await client.post("/api/email", content=b"x" * (MAX_BYTES + 1))

    assert resp.status_code == 413
    assert resp.json() == {
        "ok": False,
        "error": {"code": "payload_too_large", "message": "Payload too large."},
    }
    assert calls == []


async def test_ten_megabyte_body_rejected(client, calls):
    resp = await client.post("/api/email", content=b"{" + b"a" * (10 * 1024 * 1024) + b"}")
    assert resp.status_code == 413
    assert calls == []


async def test_chunked_body_over_limit_rejected(client, calls):
    async def chunks():
        for _ in range(8):
            yield b"y" * 512

    resp = await client.post("/api/email", content=chunks())

    assert resp.status_code == 413
    assert resp.json()["error"]["code"] == "payload_too_large"
    assert calls == []


async def test_invalid_content_length(client, calls):
    resp = await client.post(
        "/api/email",
        content=b"{}",
        headers={"Content-Length": "abc"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "bad_request"
    assert calls == []


async def test_unguarded_path_not_limited(client, calls):
    resp = await client.post("/api/other", content=b"z" * (MAX_BYTES * 2))
    assert resp.status_code == 200
    assert calls == [MAX_BYTES * 2]

# Fin del archivo backend/tests/shared/middleware/test_payload_guard.py
