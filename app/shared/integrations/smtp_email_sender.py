# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/smtp_email_sender.py

Implementación de envío de correos por SMTP.

Autor: InvoiceDesk
Actualizado: 2025-12-21

Notas:
- En runtimes tipo Railway/Nixpacks a veces no hay un CA bundle confiable y
  se observa [SSL: CERTIFICATE_VERIFY_FAILED] aun con Let's Encrypt. Con
  EMAIL_TLS_VERIFY=true se usa certifi.where() como cafile (Mozilla CA bundle).
- EMAIL_TLS_VERIFY=false usa un contexto TLS sin verificación (solo staging).
- smtplib es bloqueante: el envío corre en asyncio.to_thread.
"""

from __future__ import annotations

import asyncio
import logging
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formatdate, make_msgid
from typing import TYPE_CHECKING

import certifi

from app.shared.integrations.email_sender import EmailSendError, OutboundEmail

if TYPE_CHECKING:
    from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)


def _build_tls_context(verify: bool) -> ssl.SSLContext:
    """
    verify=True  -> contexto con verificación (CA bundle de certifi)
    verify=False -> contexto SIN verificación
    """
    if verify:
        ctx = ssl.create_default_context(cafile=certifi.where())
        ctx.check_hostname = True
        ctx.verify_mode = ssl.CERT_REQUIRED
        return ctx

    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return ctx


class SMTPEmailSender:
    """Envío de correos por SMTP con soporte SSL/TLS y adjuntos."""

    def __init__(
        self,
        server: str,
        port: int,
        username: str,
        password: str,
        use_ssl: bool = True,
        use_tls: bool = False,
        timeout: int = 30,
        tls_verify: bool = True,
    ):
        self.server = server
        self.port = port
        self.username = username
        self.password = password
        self.use_ssl = use_ssl
        self.use_tls = use_tls
        self.timeout = timeout
        self.tls_verify = tls_verify

    @classmethod
    def from_settings(cls, settings: BaseAppSettings) -> "SMTPEmailSender":
        password = settings.smtp_password.get_secret_value() if settings.smtp_password else ""
        if not all([settings.smtp_server, settings.smtp_username, password]):
            raise ValueError("EMAIL_SERVER, EMAIL_USERNAME y EMAIL_PASSWORD son requeridos")

        logger.info(
            "[SMTP] config: server=%s port=%s ssl=%s tls=%s tls_verify=%s timeout=%ss",
            settings.smtp_server,
            settings.smtp_port,
            settings.email_use_ssl,
            settings.email_use_tls,
            settings.email_tls_verify,
            settings.email_timeout_sec,
        )
        return cls(
            server=settings.smtp_server,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=password,
            use_ssl=settings.email_use_ssl,
            use_tls=settings.email_use_tls,
            timeout=settings.email_timeout_sec,
            tls_verify=settings.email_tls_verify,
        )

    def build_email_message(self, message: OutboundEmail) -> EmailMessage:
        """Construye EmailMessage con headers robustos y adjuntos."""
        msg = EmailMessage()
        msg["From"] = message.from_header
        msg["To"] = message.to
        msg["Subject"] = message.subject
        msg["Date"] = formatdate(localtime=True)
        if message.sender:
            msg["Sender"] = message.sender
        if message.reply_to_header:
            msg["Reply-To"] = message.reply_to_header

        domain = message.from_email.split("@")[-1] if "@" in message.from_email else "invoicedesk.local"
        msg["Message-ID"] = make_msgid(domain=domain)

        msg.set_content(message.text)
        if message.html:
            msg.add_alternative(message.html, subtype="html")

        for att in message.attachments:
            maintype, _, subtype = att.content_type.partition("/")
            msg.add_attachment(
                att.content,
                maintype=maintype,
                subtype=subtype or "octet-stream",
                filename=att.filename,
            )
        return msg

    def _send_sync(self, message: OutboundEmail) -> str:
        """Envío síncrono por SMTP. Retorna Message-ID."""
        msg = self.build_email_message(message)
        context = _build_tls_context(self.tls_verify)

        logger.info(
            "[SMTP] sending: to=%s subject=%s via=%s:%s",
            message.to,
            message.subject,
            self.server,
            self.port,
        )

        try:
            if self.use_ssl:
                with smtplib.SMTP_SSL(self.server, self.port, context=context, timeout=self.timeout) as server:
                    server.login(self.username, self.password)
                    refused = server.send_message(msg)
            else:
                with smtplib.SMTP(self.server, self.port, timeout=self.timeout) as server:
                    server.ehlo()
                    if self.use_tls:
                        server.starttls(context=context)
                        server.ehlo()
                    server.login(self.username, self.password)
                    refused = server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.exception("[SMTP] send failed to=%s", message.to)
            raise EmailSendError(f"SMTP error: {e}") from e

        if refused:
            logger.warning("[SMTP] refused: %s", refused)
            raise EmailSendError(f"SMTP refused recipients: {', '.join(refused)}")

        msg_id = msg.get("Message-ID", "unknown")
        logger.info("[SMTP] sent ok to=%s msg_id=%s", message.to, msg_id)
        return msg_id

    async def send_email(self, message: OutboundEmail) -> str:
        return await asyncio.to_thread(self._send_sync, message)

# Fin del archivo backend/app/shared/integrations/smtp_email_sender.py
