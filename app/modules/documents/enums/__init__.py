# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/enums/__init__.py
"""

from .document_type_enum import DocumentType, normalize_document_type, table_for

__all__ = ["DocumentType", "normalize_document_type", "table_for"]
