# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/email_sender.py

Factory unificado para EmailSender.
Soporta tres modos:
- console: stub que solo loguea y guarda los mensajes (desarrollo/tests)
- smtp: envío via SMTP tradicional
- api: envío via API (MailerSend)

Todos los senders reciben un OutboundEmail ya armado (From, Reply-To,
Sender, adjuntos) y devuelven el message id del proveedor.

Autor: InvoiceDesk
Actualizado: 2025-12-21
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from email.utils import formataddr
from typing import List, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)


class EmailSendError(RuntimeError):
    """El proveedor no aceptó el mensaje (timeout, 4xx/5xx, SMTP refused...)."""


@dataclass(frozen=True)
class EmailAttachment:
    filename: str
    content: bytes
    content_type: str = "application/pdf"


@dataclass
class OutboundEmail:
    """Mensaje listo para el proveedor."""
    from_email: str
    to: str
    subject: str
    text: str
    from_name: Optional[str] = None
    reply_to_email: Optional[str] = None
    reply_to_name: Optional[str] = None
    sender: Optional[str] = None
    html: Optional[str] = None
    attachments: List[EmailAttachment] = field(default_factory=list)

    @property
    def from_header(self) -> str:
        return formataddr((self.from_name, self.from_email)) if self.from_name else self.from_email

    @property
    def reply_to_header(self) -> Optional[str]:
        if not self.reply_to_email:
            return None
        if self.reply_to_name:
            return formataddr((self.reply_to_name, self.reply_to_email))
        return self.reply_to_email


class IEmailSender(Protocol):
    """Protocolo para implementaciones de email sender."""
    async def send_email(self, message: OutboundEmail) -> str: ...


class StubEmailSender:
    """No envía correos; loguea y guarda los mensajes en `sent` (modo console)."""

    def __init__(self):
        self.sent: List[OutboundEmail] = []

    async def send_email(self, message: OutboundEmail) -> str:
        message_id = f"console-{uuid.uuid4().hex[:12]}"
        self.sent.append(message)
        logger.info(
            "[CONSOLE EMAIL] → %s | subject=%r | attachments=%d | id=%s",
            message.to,
            message.subject,
            len(message.attachments),
            message_id,
        )
        return message_id


class EmailSender:
    """
    Factory unificado para selección de email sender.

    Variables de entorno (via settings):
    - email_mode: console | smtp | api
    - email_provider: smtp | mailersend (usado cuando email_mode=api)
    """

    @staticmethod
    def from_settings(settings: BaseAppSettings) -> IEmailSender:
        """
        Crea el email sender apropiado según settings.

        Raises:
            ValueError: modo/proveedor no soportado o credenciales faltantes
        """
        mode = (settings.email_mode or "console").strip().lower()
        provider = (settings.email_provider or "").strip().lower()

        logger.info("[EmailSender] mode=%r provider=%r", mode, provider)

        # provider="smtp" tiene prioridad sobre mode
        if provider == "smtp" or mode == "smtp":
            from app.shared.integrations.smtp_email_sender import SMTPEmailSender
            return SMTPEmailSender.from_settings(settings)

        if mode == "console":
            return StubEmailSender()

        if mode == "api":
            if provider in ("mailersend", ""):
                from app.shared.integrations.mailersend_email_sender import MailerSendEmailSender
                return MailerSendEmailSender.from_settings(settings)
            raise ValueError(
                f"EMAIL_PROVIDER '{provider}' no soportado. "
                f"Configure EMAIL_PROVIDER=mailersend o cambie EMAIL_MODE."
            )

        raise ValueError(f"EMAIL_MODE '{mode}' no reconocido. Configure EMAIL_MODE=console|smtp|api")


_sender: Optional[IEmailSender] = None


def get_email_sender() -> IEmailSender:
    """Dependencia FastAPI: sender del proceso, creado desde settings."""
    global _sender
    if _sender is None:
        from app.shared.config import settings
        _sender = EmailSender.from_settings(settings)
    return _sender


def reset_email_sender() -> None:
    """Solo para tests."""
    global _sender
    _sender = None


__all__ = [
    "EmailSendError",
    "EmailAttachment",
    "OutboundEmail",
    "IEmailSender",
    "StubEmailSender",
    "EmailSender",
    "get_email_sender",
    "reset_email_sender",
]
# Fin del archivo backend/app/shared/integrations/email_sender.py
