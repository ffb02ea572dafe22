# -*- coding: utf-8 -*-
"""
backend/tests/shared/middleware/test_request_logging.py

RequestLoggingMiddleware y get_client_ip.

Autor: InvoiceDesk
Creado: 2025-12-24
"""

import logging

import httpx
import pytest
from fastapi import FastAPI, Request

from app.shared.http_utils import get_client_ip
from app.shared.middleware import RequestLoggingMiddleware
from app.shared.middleware.request_logging import level_for_status

LOGGER = "app.shared.middleware.request_logging"


@pytest.fixture
def app():
    app = FastAPI()

    @app.get("/api/ok")
    async def ok(request: Request):
        return {"ip": get_client_ip(request)}

    @app.get("/api/limited")
    async def limited():
        from fastapi.responses import JSONResponse

        return JSONResponse({"ok": False}, status_code=429)

    @app.get("/health")
    async def health():
        return {"ok": True}

    app.add_middleware(RequestLoggingMiddleware)
    return app


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


def _completed(caplog):
    return [r for r in caplog.records if r.name == LOGGER]


async def test_logs_one_line_and_echoes_request_id(client, caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER):
        resp = await client.get("/api/ok", headers={"X-Request-ID": "req-123"})

    assert resp.status_code == 200
    assert resp.headers["X-Request-ID"] == "req-123"
    records = _completed(caplog)
    assert len(records) == 1
    assert records[0].levelno == logging.INFO
    assert "request_id=req-123" in records[0].getMessage()
    assert "status=200" in records[0].getMessage()


async def test_client_errors_log_as_warning(client, caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER):
        resp = await client.get("/api/limited")

    assert resp.status_code == 429
    assert [r.levelno for r in _completed(caplog)] == [logging.WARNING]


async def test_health_is_not_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER):
        resp = await client.get("/health")

    assert resp.status_code == 200
    assert _completed(caplog) == []


@pytest.mark.parametrize(
    "status,level",
    [(200, logging.INFO), (302, logging.INFO), (404, logging.WARNING), (413, logging.WARNING), (502, logging.ERROR)],
)
def test_level_for_status(status, level):
    assert level_for_status(status) == level


class TestClientIp:
    async def test_forwarded_header_ignored_by_default(self, client, monkeypatch):
        monkeypatch.delenv("TRUST_PROXY_HEADERS", raising=False)
        resp = await client.get("/api/ok", headers={"X-Forwarded-For": "203.0.113.7"})
        assert resp.json()["ip"] != "203.0.113.7"

    async def test_forwarded_header_used_when_trusted(self, client, monkeypatch):
        monkeypatch.setenv("TRUST_PROXY_HEADERS", "true")
        resp = await client.get("/api/ok", headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"})
        assert resp.json()["ip"] == "203.0.113.7"

    async def test_real_ip_fallback_when_trusted(self, client, monkeypatch):
        monkeypatch.setenv("TRUST_PROXY_HEADERS", "1")
        resp = await client.get("/api/ok", headers={"X-Real-IP": "198.51.100.2"})
        assert resp.json()["ip"] == "198.51.100.2"

# Fin del archivo backend/tests/shared/middleware/test_request_logging.py
