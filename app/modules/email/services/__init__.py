# -*- coding: utf-8 -*-
"""
backend/app/modules/email/services/__init__.py

Paquete liviano: el orquestador (email_send_service) se importa directo
para no arrastrar identidades/documentos desde aquí.
"""

from .email_errors import (
    EmailError,
    EmailNotConfigured,
    EmailSendFailed,
    EmailValidationError,
    InvalidJson,
)
from .message_builder import build_document_message, display_name_for, sender_header

__all__ = [
    "EmailError",
    "EmailNotConfigured",
    "EmailSendFailed",
    "EmailValidationError",
    "InvalidJson",
    "build_document_message",
    "display_name_for",
    "sender_header",
]
