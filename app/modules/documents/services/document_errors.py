# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/services/document_errors.py

Excepciones de dominio de documentos, con `code` y `status_code` para el
envelope de error.

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from typing import Optional


class DocumentError(Exception):
    code = "DOCUMENT_ERROR"
    status_code = 500

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.__class__.__doc__ or self.code
        super().__init__(self.message)


class InvalidDocumentType(DocumentError):
    """Invalid document type."""
    code = "bad_request"
    status_code = 400


class MissingDocumentId(DocumentError):
    """Missing document id."""
    code = "bad_request"
    status_code = 400


class DocumentNotFound(DocumentError):
    """Document not found."""
    code = "not_found"
    status_code = 404


class LegacyHashRequired(DocumentError):
    """Legacy payload hash required."""
    code = "legacy_hash_required"
    status_code = 400


class PayloadMismatch(DocumentError):
    """Legacy payload mismatch."""
    code = "payload_mismatch"
    status_code = 409


class PdfGenerationError(DocumentError):
    """PDF generation failed."""
    code = "pdf_generation_failed"
    status_code = 500


__all__ = [
    "DocumentError",
    "InvalidDocumentType",
    "MissingDocumentId",
    "DocumentNotFound",
    "LegacyHashRequired",
    "PayloadMismatch",
    "PdfGenerationError",
]
