# -*- coding: utf-8 -*-
"""
backend/tests/modules/documents/test_document_payload_service.py

Carga del payload acotada al dueño, mapeo camelCase, hash estable y
verificación de bodies legacy.

Autor: InvoiceDesk
Creado: 2025-12-24
"""

import pytest

from app.modules.documents.schemas import DocumentPayload
from app.modules.documents.services import (
    DocumentNotFound,
    InvalidDocumentType,
    LegacyHashRequired,
    MissingDocumentId,
    PayloadMismatch,
    enforce_legacy_payload_match,
    hash_payload,
    load_document_payload_from_db,
    stable_json,
)
from app.modules.documents.services.document_payload_service import map_invoice_row


class TestLoadPayload:
    async def test_invoice_payload(self, gateway, invoice_id, user_id):
        payload = await load_document_payload_from_db(gateway, "invoice", invoice_id, user_id)

        assert payload.doc["number"] == "2025-001"
        assert payload.doc["dueDate"] == "2025-12-15"
        assert payload.doc["vatRate"] == 19
        assert "projectId" not in payload.doc
        assert payload.settings["companyName"] == "Muster GmbH"
        assert payload.client["companyName"] == "Kunde AG"
        assert payload.client["name"] == "Kunde AG"

    async def test_offer_payload_has_valid_until(self, gateway, offer_id, user_id):
        payload = await load_document_payload_from_db(gateway, "OFFER", offer_id, user_id)
        assert payload.doc["validUntil"] == "2025-12-20"
        assert "dueDate" not in payload.doc

    async def test_every_read_is_scoped_to_owner(self, gateway, invoice_id, user_id):
        await load_document_payload_from_db(gateway, "invoice", invoice_id, user_id)

        selects = [c for c in gateway.calls if c[0] == "select"]
        assert [c[1] for c in selects] == ["invoices", "user_settings", "clients"]
        assert all(c[3]["user_id"] == user_id for c in selects)

    async def test_other_user_gets_not_found(self, gateway, invoice_id, other_user_id):
        with pytest.raises(DocumentNotFound) as exc_info:
            await load_document_payload_from_db(gateway, "invoice", invoice_id, other_user_id)
        assert exc_info.value.status_code == 404

    async def test_invalid_type(self, gateway, invoice_id, user_id):
        with pytest.raises(InvalidDocumentType):
            await load_document_payload_from_db(gateway, "receipt", invoice_id, user_id)

    async def test_missing_id(self, gateway, user_id):
        with pytest.raises(MissingDocumentId):
            await load_document_payload_from_db(gateway, "invoice", None, user_id)

    async def test_missing_settings_and_client(self, empty_gateway, invoice_id, user_id):
        empty_gateway.rows("invoices").append({"id": invoice_id, "user_id": user_id, "number": "7"})

        payload = await load_document_payload_from_db(empty_gateway, "invoice", invoice_id, user_id)

        assert payload.settings["companyName"] == ""
        assert payload.client["companyName"] == ""


class TestLegacyHash:
    @pytest.fixture
    def payload(self) -> DocumentPayload:
        return DocumentPayload(doc={"number": "1"}, settings={"companyName": "X"}, client={})

    def test_stable_json_is_key_order_independent(self):
        assert stable_json({"b": 1, "a": {"d": 2, "c": "ü"}}) == '{"a":{"c":"ü","d":2},"b":1}'

    def test_plain_body_needs_no_hash(self, payload):
        enforce_legacy_payload_match({"docId": "x", "type": "invoice"}, payload)
        enforce_legacy_payload_match(None, payload)

    def test_legacy_body_without_hash(self, payload):
        with pytest.raises(LegacyHashRequired) as exc_info:
            enforce_legacy_payload_match({"doc": {"number": "1"}}, payload)
        assert exc_info.value.code == "legacy_hash_required"

    def test_legacy_body_with_wrong_hash(self, payload):
        with pytest.raises(PayloadMismatch) as exc_info:
            enforce_legacy_payload_match({"pdfBase64": "AAA", "payloadHash": "deadbeef"}, payload)
        assert exc_info.value.status_code == 409

    def test_legacy_body_with_matching_hash(self, payload):
        body = {"doc": {"number": "manipuliert"}, "payloadHash": hash_payload(payload)}
        enforce_legacy_payload_match(body, payload)


def test_vat_rate_keeps_decimals():
    assert map_invoice_row({"vat_rate": "7.5"})["vatRate"] == 7.5
    assert map_invoice_row({"vat_rate": None})["vatRate"] == 0

# Fin del archivo backend/tests/modules/documents/test_document_payload_service.py
