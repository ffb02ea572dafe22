# -*- coding: utf-8 -*-
"""
backend/app/modules/email/schemas/email_schemas.py

Body de POST /api/email y comando ya validado para el servicio de envío.

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.modules.documents.enums import DocumentType

MAX_SUBJECT_LENGTH = 200
MAX_MESSAGE_LENGTH = 5000


class EmailSendRequest(BaseModel):
    """
    Acepta docId/documentId y type/documentType. Los campos legacy
    (doc, settings, client, pdfBase64) quedan en model_extra.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    doc_id: Optional[str] = Field(default=None, alias="docId")
    document_id: Optional[str] = Field(default=None, alias="documentId")
    type: Optional[str] = None
    document_type: Optional[str] = Field(default=None, alias="documentType")
    to: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    sender_identity_id: Optional[str] = Field(default=None, alias="senderIdentityId")
    payload_hash: Optional[str] = Field(default=None, alias="payloadHash")

    @property
    def resolved_doc_id(self) -> Optional[str]:
        return self.doc_id or self.document_id

    @property
    def resolved_type(self) -> Optional[str]:
        return self.type or self.document_type


@dataclass(frozen=True)
class EmailSendCommand:
    """`doc_type` llega tal cual; se valida al cargar el documento."""
    doc_id: str
    doc_type: str
    to: str
    subject: str
    message: str
    sender_identity_id: str


@dataclass(frozen=True)
class EmailSendResult:
    message_id: str
    doc_type: DocumentType
    doc_id: str
    locked: bool = False


__all__ = [
    "MAX_SUBJECT_LENGTH",
    "MAX_MESSAGE_LENGTH",
    "EmailSendRequest",
    "EmailSendCommand",
    "EmailSendResult",
]
