# -*- coding: utf-8 -*-
"""
backend/tests/shared/integrations/test_mailersend_email_sender.py

MailerSendEmailSender contra un transporte httpx simulado:
- 202 + X-Message-Id → message id
- Adjuntos en base64
- Status distinto de 202 y errores de red → EmailSendError

Autor: InvoiceDesk
Creado: 2025-12-24
"""

import base64
import json

import httpx
import pytest

from app.shared.integrations.email_sender import EmailAttachment, EmailSendError, OutboundEmail
from app.shared.integrations.mailersend_email_sender import MailerSendEmailSender


def _message() -> OutboundEmail:
    return OutboundEmail(
        from_email="noreply@invoicedesk.test",
        from_name="Muster GmbH via InvoiceDesk",
        to="erika@kunde.de",
        subject="Angebot ANG-2025-001",
        text="Im Anhang finden Sie Angebot ANG-2025-001.",
        reply_to_email="max@muster.de",
        reply_to_name="Muster GmbH",
        attachments=[EmailAttachment(filename="Angebot_ANG-2025-001.pdf", content=b"%PDF-1.4 data")],
    )


def _sender(handler) -> MailerSendEmailSender:
    return MailerSendEmailSender(api_key="mlsn.test", transport=httpx.MockTransport(handler))


async def test_accepted_returns_message_id():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["auth"] = request.headers["Authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(202, headers={"X-Message-Id": "ms-123"})

    message_id = await _sender(handler).send_email(_message())

    assert message_id == "ms-123"
    assert captured["auth"] == "Bearer mlsn.test"
    body = captured["body"]
    assert body["from"] == {"email": "noreply@invoicedesk.test", "name": "Muster GmbH via InvoiceDesk"}
    assert body["reply_to"] == {"email": "max@muster.de", "name": "Muster GmbH"}
    assert body["to"] == [{"email": "erika@kunde.de"}]
    att = body["attachments"][0]
    assert att["filename"] == "Angebot_ANG-2025-001.pdf"
    assert base64.b64decode(att["content"]) == b"%PDF-1.4 data"


async def test_non_202_raises():
    def handler(request):
        return httpx.Response(422, text='{"message":"invalid from"}')

    with pytest.raises(EmailSendError, match="422"):
        await _sender(handler).send_email(_message())


async def test_network_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(EmailSendError, match="request error"):
        await _sender(handler).send_email(_message())


def test_requires_api_key():
    with pytest.raises(ValueError):
        MailerSendEmailSender(api_key="")

# Fin del archivo backend/tests/shared/integrations/test_mailersend_email_sender.py
