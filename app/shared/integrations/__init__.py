# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/__init__.py

Clientes de integración con servicios externos (proveedores de email).
"""

from .email_sender import (
    EmailAttachment,
    EmailSendError,
    EmailSender,
    IEmailSender,
    OutboundEmail,
    StubEmailSender,
    get_email_sender,
)

__all__ = [
    "EmailAttachment",
    "EmailSendError",
    "EmailSender",
    "IEmailSender",
    "OutboundEmail",
    "StubEmailSender",
    "get_email_sender",
]
