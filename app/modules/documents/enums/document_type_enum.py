# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/enums/document_type_enum.py

Tipos de documento enviables.

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from enum import StrEnum
from typing import Any, Optional


class DocumentType(StrEnum):
    INVOICE = "invoice"
    OFFER = "offer"


_TABLES = {
    DocumentType.INVOICE: "invoices",
    DocumentType.OFFER: "offers",
}


def normalize_document_type(value: Any) -> Optional[DocumentType]:
    """'Invoice', 'OFFER', ... → DocumentType; None si no es un tipo conocido."""
    if value is None:
        return None
    try:
        return DocumentType(str(value).strip().lower())
    except ValueError:
        return None


def table_for(doc_type: DocumentType) -> str:
    return _TABLES[DocumentType(doc_type)]


__all__ = ["DocumentType", "normalize_document_type", "table_for"]
# Fin del archivo backend/app/modules/documents/enums/document_type_enum.py
