# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/mailersend_email_sender.py

Implementación de envío de correos usando MailerSend API.

Autor: InvoiceDesk
Creado: 2025-12-21

Notas:
- MailerSend API es más confiable que SMTP en entornos cloud (Railway, Vercel).
- Los adjuntos viajan en base64 dentro del JSON.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

import httpx

from app.shared.integrations.email_sender import EmailSendError, OutboundEmail

if TYPE_CHECKING:
    from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)

# MailerSend API endpoint
MAILERSEND_API_URL = "https://api.mailersend.com/v1/email"


class MailerSendEmailSender:
    """Envío de correos usando MailerSend API."""

    def __init__(
        self,
        api_key: str,
        timeout: int = 30,
        api_url: str = MAILERSEND_API_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ValueError("MAILERSEND_API_KEY es requerido")
        self.api_key = api_key
        self.timeout = timeout
        self.api_url = api_url
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: BaseAppSettings) -> "MailerSendEmailSender":
        """
        Raises:
            ValueError: si faltan credenciales requeridas
        """
        api_key = ""
        if settings.mailersend_api_key:
            api_key = settings.mailersend_api_key.get_secret_value().strip()
        if not api_key:
            raise ValueError("[MailerSend] MAILERSEND_API_KEY es requerido.")

        timeout = settings.email_timeout_sec or 30
        logger.info("[MailerSend] config: timeout=%ss", timeout)
        return cls(api_key=api_key, timeout=timeout)

    def build_payload(self, message: OutboundEmail) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "from": {"email": message.from_email},
            "to": [{"email": message.to}],
            "subject": message.subject,
            "text": message.text,
        }
        if message.from_name:
            payload["from"]["name"] = message.from_name
        if message.html:
            payload["html"] = message.html
        if message.reply_to_email:
            reply_to: Dict[str, str] = {"email": message.reply_to_email}
            if message.reply_to_name:
                reply_to["name"] = message.reply_to_name
            payload["reply_to"] = reply_to
        if message.attachments:
            payload["attachments"] = [
                {
                    "filename": att.filename,
                    "content": base64.b64encode(att.content).decode("ascii"),
                    "disposition": "attachment",
                }
                for att in message.attachments
            ]
        return payload

    async def send_email(self, message: OutboundEmail) -> str:
        """Envía email via MailerSend API. Retorna message_id."""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.info(
            "[MailerSend] sending: to=%s subject=%s from=%s attachments=%d",
            message.to,
            message.subject,
            message.from_email,
            len(message.attachments),
        )

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(self.api_url, json=self.build_payload(message), headers=headers)
            except httpx.TimeoutException as e:
                logger.error("[MailerSend] timeout: to=%s error=%s", message.to, e)
                raise EmailSendError(f"MailerSend timeout: {e}") from e
            except httpx.RequestError as e:
                logger.error("[MailerSend] request error: to=%s error=%s", message.to, e)
                raise EmailSendError(f"MailerSend request error: {e}") from e

        # MailerSend responde 202 Accepted
        if response.status_code == 202:
            message_id = response.headers.get("X-Message-Id", "accepted")
            logger.info("[MailerSend] sent ok: to=%s message_id=%s", message.to, message_id)
            return message_id

        logger.error(
            "[MailerSend] send failed: to=%s status=%d body=%s",
            message.to,
            response.status_code,
            response.text[:500],
        )
        raise EmailSendError(f"MailerSend API error: {response.status_code} - {response.text[:200]}")

# Fin del archivo backend/app/shared/integrations/mailersend_email_sender.py
