# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/schemas/__init__.py
"""

from .document_payload_schemas import DocumentPayload, PdfRequest

__all__ = ["DocumentPayload", "PdfRequest"]
