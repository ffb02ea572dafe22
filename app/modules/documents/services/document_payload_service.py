# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/services/document_payload_service.py

Carga del payload de un documento desde BD, siempre acotado al dueño:
documento (id + user_id), user_settings (user_id) y cliente (id + user_id).

Incluye el hash estable del payload y la verificación de clientes
antiguos que todavía mandan doc/settings/client en el body.

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

import hashlib
import json
import logging
from typing import Any, Mapping, Optional

from app.shared.database.table_gateway import SingleRowReader
from app.shared.utils.validators import validate_uuid
from app.modules.documents.enums import DocumentType, normalize_document_type, table_for
from app.modules.documents.schemas import DocumentPayload
from app.modules.documents.services.document_errors import (
    DocumentNotFound,
    InvalidDocumentType,
    LegacyHashRequired,
    MissingDocumentId,
    PayloadMismatch,
)

logger = logging.getLogger(__name__)

_INVOICE_COLUMNS = (
    "id", "user_id", "number", "client_id", "project_id", "date", "due_date",
    "positions", "intro_text", "footer_text", "vat_rate",
)
_OFFER_COLUMNS = (
    "id", "user_id", "number", "client_id", "project_id", "date", "valid_until",
    "positions", "intro_text", "footer_text", "vat_rate",
)
_SETTINGS_COLUMNS = (
    "company_name", "address", "tax_id", "iban", "bic", "bank_name", "footer_text",
)
_CLIENT_COLUMNS = ("id", "company_name", "contact_person", "email", "address")

LEGACY_BODY_KEYS = ("doc", "settings", "client", "pdfBase64")


def _number(value: Any) -> Any:
    """Números como en JSON de JS: 19 y no 19.0."""
    try:
        n = float(value if value is not None else 0)
    except (TypeError, ValueError):
        return 0
    return int(n) if n.is_integer() else n


def _without_none(d: dict) -> dict:
    return {k: v for k, v in d.items() if v is not None}


def map_invoice_row(row: Mapping[str, Any]) -> dict:
    return _without_none({
        "id": row.get("id"),
        "number": row.get("number"),
        "clientId": row.get("client_id"),
        "projectId": row.get("project_id"),
        "date": row.get("date"),
        "dueDate": row.get("due_date") or "",
        "positions": row.get("positions") or [],
        "introText": row.get("intro_text") or "",
        "footerText": row.get("footer_text") or "",
        "vatRate": _number(row.get("vat_rate")),
    })


def map_offer_row(row: Mapping[str, Any]) -> dict:
    return _without_none({
        "id": row.get("id"),
        "number": row.get("number"),
        "clientId": row.get("client_id"),
        "projectId": row.get("project_id"),
        "date": row.get("date"),
        "validUntil": row.get("valid_until") or "",
        "positions": row.get("positions") or [],
        "introText": row.get("intro_text") or "",
        "footerText": row.get("footer_text") or "",
        "vatRate": _number(row.get("vat_rate")),
    })


def map_settings_row(row: Mapping[str, Any]) -> dict:
    return {
        "companyName": row.get("company_name") or "",
        "address": row.get("address") or "",
        "taxId": row.get("tax_id") or "",
        "iban": row.get("iban") or "",
        "bic": row.get("bic") or "",
        "bankName": row.get("bank_name") or "",
        "footerText": row.get("footer_text") or "",
    }


def map_client_row(row: Mapping[str, Any]) -> dict:
    return {
        "companyName": row.get("company_name") or "",
        "name": row.get("company_name") or "",
        "contactPerson": row.get("contact_person") or "",
        "email": row.get("email") or "",
        "address": row.get("address") or "",
    }


async def load_document_payload_from_db(
    reader: SingleRowReader,
    doc_type: Any,
    doc_id: Optional[str],
    user_id: str,
) -> DocumentPayload:
    """
    Raises:
        InvalidDocumentType, MissingDocumentId (400), DocumentNotFound (404)
    """
    resolved = normalize_document_type(doc_type)
    if resolved is None:
        raise InvalidDocumentType()
    if not doc_id:
        raise MissingDocumentId()
    if not validate_uuid(str(doc_id)):
        raise DocumentNotFound()

    is_invoice = resolved == DocumentType.INVOICE
    doc_row = await reader.select_one(
        table_for(resolved),
        {"id": str(doc_id), "user_id": str(user_id)},
        columns=_INVOICE_COLUMNS if is_invoice else _OFFER_COLUMNS,
    )
    if not doc_row:
        logger.info("[Documents] %s %s no encontrado para user=%s", resolved, doc_id, user_id)
        raise DocumentNotFound()

    doc = map_invoice_row(doc_row) if is_invoice else map_offer_row(doc_row)

    settings_row = await reader.select_one(
        "user_settings", {"user_id": str(user_id)}, columns=_SETTINGS_COLUMNS
    )
    settings = map_settings_row(settings_row or {})

    client = map_client_row({})
    if doc.get("clientId"):
        client_row = await reader.select_one(
            "clients",
            {"id": str(doc["clientId"]), "user_id": str(user_id)},
            columns=_CLIENT_COLUMNS,
        )
        if client_row:
            client = map_client_row(client_row)

    return DocumentPayload(doc=doc, settings=settings, client=client)


def stable_json(value: Any) -> str:
    """JSON con llaves ordenadas y sin espacios."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def hash_payload(payload: DocumentPayload) -> str:
    return hashlib.sha256(stable_json(payload.as_dict()).encode("utf-8")).hexdigest()


def enforce_legacy_payload_match(body: Optional[Mapping[str, Any]], payload: DocumentPayload) -> None:
    """
    Un body con doc/settings/client/pdfBase64 debe traer payloadHash igual
    al hash del payload cargado de BD. El contenido del body nunca se usa.
    """
    if not body:
        return
    if not any(body.get(k) for k in LEGACY_BODY_KEYS):
        return
    provided = body.get("payloadHash")
    if not provided:
        raise LegacyHashRequired()
    if str(provided) != hash_payload(payload):
        raise PayloadMismatch()


__all__ = [
    "LEGACY_BODY_KEYS",
    "load_document_payload_from_db",
    "map_invoice_row",
    "map_offer_row",
    "map_settings_row",
    "map_client_row",
    "stable_json",
    "hash_payload",
    "enforce_legacy_payload_match",
]
# Fin del archivo backend/app/modules/documents/services/document_payload_service.py
