# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/utils/__init__.py
"""

from .formatting import format_currency, format_date
from .pdf_document_renderer import create_pdf_buffer_from_payload

__all__ = ["format_currency", "format_date", "create_pdf_buffer_from_payload"]
