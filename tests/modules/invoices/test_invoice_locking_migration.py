# -*- coding: utf-8 -*-
"""
backend/tests/modules/invoices/test_invoice_locking_migration.py

La migración de bloqueo define la función y el trigger que protegen las
facturas finalizadas, y levanta los mismos códigos que traduce la app.

Autor: InvoiceDesk
Creado: 2025-12-24
"""

from pathlib import Path

import pytest

from app.modules.invoices.facades.errors import GUARD_CODE_ERRORS
from app.shared.database.table_gateway import extract_guard_code

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "database" / "migrations"
LOCKING_SQL = MIGRATIONS_DIR / "20251225_invoice_locking.sql"


@pytest.fixture(scope="module")
def locking_sql() -> str:
    assert LOCKING_SQL.exists(), f"Falta {LOCKING_SQL}"
    return LOCKING_SQL.read_text(encoding="utf-8")


def test_defines_update_guard(locking_sql):
    assert "function prevent_locked_invoice_update()" in locking_sql
    assert "create trigger trg_prevent_locked_invoice_update" in locking_sql
    assert "before update on invoices" in locking_sql.lower()


def test_defines_delete_and_payment_guards(locking_sql):
    assert "trg_prevent_locked_invoice_delete" in locking_sql
    assert "trg_prevent_locked_invoice_payment_change" in locking_sql


@pytest.mark.parametrize("code", sorted(GUARD_CODE_ERRORS))
def test_guard_codes_raised_by_trigger(locking_sql, code):
    assert f"raise exception '{code}" in locking_sql


def test_initial_schema_precedes_locking():
    files = sorted(p.name for p in MIGRATIONS_DIR.glob("*.sql"))
    assert files.index("20251220_initial_schema.sql") < files.index(LOCKING_SQL.name)


@pytest.mark.parametrize(
    "driver_message, expected",
    [
        ('<class \'asyncpg.exceptions.RaiseError\'>: INVOICE_LOCKED_CONTENT', "INVOICE_LOCKED_CONTENT"),
        ("STATUS_TRANSITION_NOT_ALLOWED: PAID -> DRAFT", "STATUS_TRANSITION_NOT_ALLOWED"),
        ("connection refused", None),
    ],
)
def test_extract_guard_code(driver_message, expected):
    assert extract_guard_code(Exception(driver_message)) == expected

# Fin del archivo backend/tests/modules/invoices/test_invoice_locking_migration.py
