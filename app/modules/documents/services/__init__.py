# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/services/__init__.py
"""

from .document_errors import (
    DocumentError,
    DocumentNotFound,
    InvalidDocumentType,
    LegacyHashRequired,
    MissingDocumentId,
    PayloadMismatch,
    PdfGenerationError,
)
from .document_payload_service import (
    enforce_legacy_payload_match,
    hash_payload,
    load_document_payload_from_db,
    stable_json,
)
from .pdf_attachment_service import (
    PdfAttachment,
    build_pdf_filename,
    create_pdf_attachment,
    sanitize_filename,
)
from .pdf_download_token_service import (
    PdfDownloadGrant,
    PdfDownloadTokenService,
    get_pdf_download_tokens,
)
from .send_metadata_service import SEND_VIA_EMAIL, update_send_metadata

__all__ = [
    "DocumentError",
    "DocumentNotFound",
    "InvalidDocumentType",
    "LegacyHashRequired",
    "MissingDocumentId",
    "PayloadMismatch",
    "PdfGenerationError",
    "enforce_legacy_payload_match",
    "hash_payload",
    "load_document_payload_from_db",
    "stable_json",
    "PdfAttachment",
    "build_pdf_filename",
    "create_pdf_attachment",
    "sanitize_filename",
    "PdfDownloadGrant",
    "PdfDownloadTokenService",
    "get_pdf_download_tokens",
    "SEND_VIA_EMAIL",
    "update_send_metadata",
]
