# -*- coding: utf-8 -*-
"""
backend/tests/conftest.py

Config global de tests para InvoiceDesk.

- Entorno `test` fijado ANTES de importar la app (sin Redis, emails stub)
- Singletons (settings, rate limiter, Redis, email sender) limpios por test
- InMemoryTableGateway: implementa las capacidades del TableGateway sobre
  dicts, registra cada llamada y permite inyectar fallos por operación
- App FastAPI con dependency_overrides (gateway en memoria + StubEmailSender)
  y cliente httpx con ciclo de vida (asgi-lifespan)

Autor: InvoiceDesk
Fecha: 2025-12-24
"""

import os
import uuid
from collections.abc import AsyncIterator
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pytest

# -----------------------------------------------------------------------------
# 0) Entorno mínimo (antes de cualquier import de app.*)
# -----------------------------------------------------------------------------
os.environ["PYTHON_ENV"] = "test"
os.environ.setdefault("EMAIL_MODE", "console")
os.environ.setdefault("EMAIL_FROM", "noreply@invoicedesk.test")
os.environ.setdefault("SENDER_DOMAIN_NAME", "InvoiceDesk")
os.environ.pop("REDIS_URL", None)

from httpx import ASGITransport, AsyncClient
from asgi_lifespan import LifespanManager

from app.shared.config.config_loader import get_settings
from app.shared.database.table_gateway import StorageError
from app.shared.integrations.email_sender import StubEmailSender, reset_email_sender
from app.shared.redis.client import RedisClientManager
from app.shared.security.rate_limit_service import RateLimiter
from app.modules.documents.services.pdf_download_token_service import PdfDownloadTokenService

USER_ID = "11111111-1111-4111-8111-111111111111"
OTHER_USER_ID = "22222222-2222-4222-8222-222222222222"
CLIENT_ID = "33333333-3333-4333-8333-333333333333"
INVOICE_ID = "44444444-4444-4444-8444-444444444444"
OFFER_ID = "55555555-5555-4555-8555-555555555555"
IDENTITY_ID = "66666666-6666-4666-8666-666666666666"


# -----------------------------------------------------------------------------
# 1) Gateway en memoria
# -----------------------------------------------------------------------------
def _matches(row: Mapping[str, Any], where: Mapping[str, Any]) -> bool:
    return all(row.get(k) == v for k, v in where.items())


class InMemoryTableGateway:
    """
    TableGateway sobre dicts.

    - `calls`: lista de (operación, tabla, values, where)
    - `fail(op, table, error)`: la próxima llamada (op, table) levanta `error`
    - `updates_for(table)`: updates registrados sobre una tabla
    """

    def __init__(self, tables: Optional[Dict[str, List[dict]]] = None):
        self.tables: Dict[str, List[dict]] = {k: [dict(r) for r in v] for k, v in (tables or {}).items()}
        self.calls: List[tuple] = []
        self._failures: Dict[tuple, List[Exception]] = {}

    def fail(self, op: str, table: str, error: Optional[Exception] = None, times: int = 1) -> None:
        err = error or StorageError("simulated storage failure")
        self._failures.setdefault((op, table), []).extend([err] * times)

    def _maybe_fail(self, op: str, table: str) -> None:
        pending = self._failures.get((op, table))
        if pending:
            raise pending.pop(0)

    def rows(self, table: str) -> List[dict]:
        return self.tables.setdefault(table, [])

    def updates_for(self, table: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == "update" and c[1] == table]

    async def update_where(self, table: str, values: Mapping[str, Any], where: Mapping[str, Any]) -> int:
        self.calls.append(("update", table, dict(values), dict(where)))
        self._maybe_fail("update", table)
        affected = 0
        for row in self.rows(table):
            if _matches(row, where):
                row.update(values)
                affected += 1
        return affected

    async def select_one(
        self,
        table: str,
        where: Mapping[str, Any],
        columns: Optional[Sequence[str]] = None,
    ) -> Optional[dict]:
        self.calls.append(("select", table, None, dict(where)))
        self._maybe_fail("select", table)
        for row in self.rows(table):
            if _matches(row, where):
                return {c: row.get(c) for c in columns} if columns else dict(row)
        return None

    async def insert_row(self, table: str, values: Mapping[str, Any]) -> dict:
        self.calls.append(("insert", table, dict(values), None))
        self._maybe_fail("insert", table)
        row = {
            "id": str(uuid.uuid4()),
            "created_at": datetime.now(timezone.utc).isoformat(),
            **values,
        }
        self.rows(table).append(row)
        return dict(row)

    async def select_many(
        self,
        table: str,
        where: Mapping[str, Any],
        columns: Optional[Sequence[str]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[dict]:
        self.calls.append(("select_many", table, None, dict(where)))
        self._maybe_fail("select_many", table)
        found = [r for r in self.rows(table) if _matches(r, where)]
        if order_by:
            found.sort(key=lambda r: str(r.get(order_by) or ""), reverse=descending)
        return [{c: r.get(c) for c in columns} if columns else dict(r) for r in found]


def seed_tables() -> Dict[str, List[dict]]:
    """Usuario con ajustes, un cliente, una factura DRAFT, una oferta y una identidad verificada."""
    positions = [
        {"description": "Beratung", "quantity": 2, "price": 100},
        {"description": "Umsetzung", "quantity": 1.5, "price": 80},
    ]
    return {
        "user_settings": [{
            "user_id": USER_ID,
            "company_name": "Muster GmbH",
            "name": "Max Muster",
            "address": "Hauptstr. 1\n10115 Berlin",
            "tax_id": "DE123456789",
            "iban": "DE02120300000000202051",
            "bic": "BYLADEM1001",
            "bank_name": "DKB",
            "footer_text": "Vielen Dank!",
            "email": "max@muster.de",
        }],
        "clients": [{
            "id": CLIENT_ID,
            "user_id": USER_ID,
            "company_name": "Kunde AG",
            "contact_person": "Erika Beispiel",
            "email": "erika@kunde.de",
            "address": "Nebenweg 5\n80331 München",
        }],
        "invoices": [{
            "id": INVOICE_ID,
            "user_id": USER_ID,
            "client_id": CLIENT_ID,
            "number": "2025-001",
            "date": "2025-12-01",
            "due_date": "2025-12-15",
            "positions": positions,
            "intro_text": "",
            "footer_text": "",
            "vat_rate": 19.0,
            "is_small_business": False,
            "status": "DRAFT",
            "is_locked": False,
            "finalized_at": None,
            "sent_count": 0,
            "sent_at": None,
        }],
        "offers": [{
            "id": OFFER_ID,
            "user_id": USER_ID,
            "client_id": CLIENT_ID,
            "number": "2025-002",
            "date": "2025-11-20",
            "valid_until": "2025-12-20",
            "positions": positions,
            "intro_text": "",
            "footer_text": "",
            "vat_rate": 19.0,
            "status": "DRAFT",
            "sent_count": 0,
            "sent_at": None,
        }],
        "sender_identities": [{
            "id": IDENTITY_ID,
            "user_id": USER_ID,
            "email": "max@muster.de",
            "display_name": "Max Muster",
            "status": "verified",
            "verified_at": "2025-11-01T10:00:00+00:00",
            "last_used_at": None,
            "last_verification_sent_at": None,
            "created_at": "2025-11-01T09:00:00+00:00",
        }],
    }


# -----------------------------------------------------------------------------
# 2) Singletons limpios por test
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _reset_singletons(monkeypatch):
    monkeypatch.setenv("PYTHON_ENV", "test")
    monkeypatch.delenv("REDIS_URL", raising=False)
    get_settings.cache_clear()
    RateLimiter.reset_instance()
    RedisClientManager.reset_instance()
    PdfDownloadTokenService.reset_instance()
    reset_email_sender()
    yield
    get_settings.cache_clear()
    RateLimiter.reset_instance()
    RedisClientManager.reset_instance()
    PdfDownloadTokenService.reset_instance()
    reset_email_sender()


# -----------------------------------------------------------------------------
# 3) Fixtures de dominio
# -----------------------------------------------------------------------------
@pytest.fixture
def gateway() -> InMemoryTableGateway:
    return InMemoryTableGateway(seed_tables())


@pytest.fixture
def empty_gateway() -> InMemoryTableGateway:
    return InMemoryTableGateway()


@pytest.fixture
def stub_sender() -> StubEmailSender:
    return StubEmailSender()


@pytest.fixture
def user_id() -> str:
    return USER_ID


@pytest.fixture
def other_user_id() -> str:
    return OTHER_USER_ID


@pytest.fixture
def invoice_id() -> str:
    return INVOICE_ID


@pytest.fixture
def offer_id() -> str:
    return OFFER_ID


@pytest.fixture
def identity_id() -> str:
    return IDENTITY_ID


@pytest.fixture
def auth_headers(user_id):
    from app.modules.auth.security import create_access_token

    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


# -----------------------------------------------------------------------------
# 4) App FastAPI y cliente httpx (con ciclo de vida)
# -----------------------------------------------------------------------------
@pytest.fixture
def app(gateway, stub_sender):
    """
    App nueva por test; la capa de datos y el mailer se sustituyen por
    InMemoryTableGateway y StubEmailSender.
    """
    from app.main import create_app
    from app.modules.email.routes.deps import get_mailer
    from app.shared.database.database import get_table_gateway

    fastapi_app = create_app()

    async def _gateway():
        return gateway

    async def _mailer():
        return stub_sender

    fastapi_app.dependency_overrides[get_table_gateway] = _gateway
    fastapi_app.dependency_overrides[get_mailer] = _mailer
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app) -> AsyncIterator[AsyncClient]:
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client

# Fin del archivo backend/tests/conftest.py
