# -*- coding: utf-8 -*-
"""
backend/app/modules/email/services/email_errors.py

Excepciones del envío de emails, con `code` y `status_code`.

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

from typing import Optional


class EmailError(Exception):
    code = "EMAIL_ERROR"
    status_code = 500

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None):
        if code:
            self.code = code
        self.message = message or self.__class__.__doc__ or self.code
        super().__init__(self.message)


class InvalidJson(EmailError):
    """Invalid JSON body."""
    code = "invalid_json"
    status_code = 400


class EmailValidationError(EmailError):
    """Validación del body; el `code` concreto lo pone quien la lanza."""
    code = "bad_request"
    status_code = 400


class EmailNotConfigured(EmailError):
    """E-Mail Versand ist nicht konfiguriert."""
    code = "EMAIL_NOT_CONFIGURED"
    status_code = 501


class EmailSendFailed(EmailError):
    """Email send failed."""
    code = "EMAIL_SEND_FAILED"
    status_code = 502


__all__ = [
    "EmailError",
    "InvalidJson",
    "EmailValidationError",
    "EmailNotConfigured",
    "EmailSendFailed",
]
