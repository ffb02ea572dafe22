# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/services/pdf_attachment_service.py

PDF como adjunto: bytes + nombre de archivo saneado
("RE-2025-001_Muster-GmbH_2025-12-01.pdf").

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

import logging
import re
import unicodedata
from dataclasses import dataclass
from typing import Any

from app.modules.documents.enums import DocumentType, normalize_document_type
from app.modules.documents.schemas import DocumentPayload
from app.modules.documents.services.document_errors import PdfGenerationError
from app.modules.documents.utils.pdf_document_renderer import create_pdf_buffer_from_payload

logger = logging.getLogger(__name__)

_UNSAFE_RE = re.compile(r"[^\w.-]+", re.ASCII)
_DASHES_RE = re.compile(r"-+")
MAX_FILENAME_LENGTH = 120


@dataclass(frozen=True)
class PdfAttachment:
    buffer: bytes
    filename: str


def sanitize_filename(name: Any) -> str:
    """Solo [A-Za-z0-9_.-]; umlauts pierden el diacrítico ("Müller" → "Muller")."""
    normalized = (
        unicodedata.normalize("NFKD", str(name or "")).encode("ascii", "ignore").decode("ascii")
    )
    cleaned = _DASHES_RE.sub("-", _UNSAFE_RE.sub("-", normalized)).strip("-")
    return cleaned[:MAX_FILENAME_LENGTH] or "document"


def build_pdf_filename(doc_type: Any, payload: DocumentPayload) -> str:
    prefix = "RE" if normalize_document_type(doc_type) == DocumentType.INVOICE else "ANG"
    client_name = payload.client.get("companyName") or payload.client.get("name") or ""
    date_part = payload.doc.get("date") or ""
    number = payload.doc.get("number") or "0000"
    return sanitize_filename(f"{prefix}-{number}_{client_name}_{date_part}.pdf")


def create_pdf_attachment(doc_type: Any, payload: DocumentPayload) -> PdfAttachment:
    try:
        buffer = create_pdf_buffer_from_payload(doc_type, payload)
    except Exception as e:
        logger.exception("[PDF] generación falló para %s", doc_type)
        raise PdfGenerationError() from e
    filename = build_pdf_filename(doc_type, payload)
    logger.debug("[PDF] %s generado (%d bytes)", filename, len(buffer))
    return PdfAttachment(buffer=buffer, filename=filename)


__all__ = [
    "PdfAttachment",
    "MAX_FILENAME_LENGTH",
    "sanitize_filename",
    "build_pdf_filename",
    "create_pdf_attachment",
]
