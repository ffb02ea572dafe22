# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/schemas/document_payload_schemas.py

- DocumentPayload: lo que necesita el PDF (doc, settings del emisor,
  cliente) en camelCase, tal como lo ve el frontend.
- PdfRequest: body de POST /api/pdf.

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class DocumentPayload:
    doc: Dict[str, Any] = field(default_factory=dict)
    settings: Dict[str, Any] = field(default_factory=dict)
    client: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return {"doc": self.doc, "settings": self.settings, "client": self.client}


class PdfRequest(BaseModel):
    """Acepta docId/documentId y type/documentType."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    doc_id: Optional[str] = Field(default=None, alias="docId")
    document_id: Optional[str] = Field(default=None, alias="documentId")
    type: Optional[str] = None
    document_type: Optional[str] = Field(default=None, alias="documentType")
    payload_hash: Optional[str] = Field(default=None, alias="payloadHash")

    @property
    def resolved_doc_id(self) -> Optional[str]:
        return self.doc_id or self.document_id

    @property
    def resolved_type(self) -> Optional[str]:
        return self.type or self.document_type


__all__ = ["DocumentPayload", "PdfRequest"]
