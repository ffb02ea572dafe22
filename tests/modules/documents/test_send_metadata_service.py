# -*- coding: utf-8 -*-
"""
backend/tests/modules/documents/test_send_metadata_service.py

Autor: InvoiceDesk
Creado: 2025-12-24
"""

from datetime import datetime, timezone

import pytest

from app.modules.documents.services import update_send_metadata

FIRST = datetime(2025, 12, 2, 8, 0, tzinfo=timezone.utc)
SECOND = datetime(2025, 12, 5, 8, 0, tzinfo=timezone.utc)


async def test_first_send(gateway, invoice_id, user_id):
    values = await update_send_metadata(
        gateway, gateway, "invoice", invoice_id, user_id, to="erika@kunde.de", clock=lambda: FIRST
    )

    assert values == {
        "sent_at": FIRST.isoformat(),
        "last_sent_at": FIRST.isoformat(),
        "sent_count": 1,
        "sent_via": "EMAIL",
        "last_sent_to": "erika@kunde.de",
        "status": "SENT",
    }


async def test_second_send_keeps_first_sent_at(gateway, offer_id, user_id):
    await update_send_metadata(gateway, gateway, "offer", offer_id, user_id, clock=lambda: FIRST)
    values = await update_send_metadata(gateway, gateway, "offer", offer_id, user_id, clock=lambda: SECOND)

    row = gateway.rows("offers")[0]
    assert values["sent_count"] == 2
    assert row["sent_at"] == FIRST.isoformat()
    assert row["last_sent_at"] == SECOND.isoformat()
    assert "status" not in values


@pytest.mark.parametrize("status,expected", [("ISSUED", "SENT"), ("SENT", "SENT"), ("PAID", "PAID")])
async def test_status_after_send(gateway, invoice_id, user_id, status, expected):
    gateway.rows("invoices")[0]["status"] = status

    await update_send_metadata(gateway, gateway, "invoice", invoice_id, user_id, clock=lambda: FIRST)

    assert gateway.rows("invoices")[0]["status"] == expected


async def test_missing_ids_is_noop(gateway, user_id):
    assert await update_send_metadata(gateway, gateway, "invoice", None, user_id) is None
    assert gateway.calls == []

# Fin del archivo backend/tests/modules/documents/test_send_metadata_service.py
