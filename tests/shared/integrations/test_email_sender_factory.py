# -*- coding: utf-8 -*-
"""
backend/tests/shared/integrations/test_email_sender_factory.py

Selección del sender según EMAIL_MODE / EMAIL_PROVIDER.

Autor: InvoiceDesk
Creado: 2025-12-24
"""

from types import SimpleNamespace

import pytest
from pydantic import SecretStr

from app.shared.integrations.email_sender import (
    EmailSender,
    OutboundEmail,
    StubEmailSender,
    get_email_sender,
)
from app.shared.integrations.mailersend_email_sender import MailerSendEmailSender
from app.shared.integrations.smtp_email_sender import SMTPEmailSender


def _settings(**overrides):
    base = dict(
        email_mode="console",
        email_provider="",
        email_timeout_sec=10,
        smtp_server="smtp.test.local",
        smtp_port=465,
        smtp_username="user",
        smtp_password=SecretStr("pass"),
        email_use_ssl=True,
        email_use_tls=False,
        email_tls_verify=True,
        mailersend_api_key=SecretStr("mlsn.test"),
    )
    base.update(overrides)
    return SimpleNamespace(**base)


class TestEmailSenderFactory:
    def test_console_mode(self):
        assert isinstance(EmailSender.from_settings(_settings()), StubEmailSender)

    def test_smtp_mode(self):
        sender = EmailSender.from_settings(_settings(email_mode="smtp"))
        assert isinstance(sender, SMTPEmailSender)
        assert sender.timeout == 10

    def test_api_mode_defaults_to_mailersend(self):
        assert isinstance(EmailSender.from_settings(_settings(email_mode="api")), MailerSendEmailSender)

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="EMAIL_PROVIDER"):
            EmailSender.from_settings(_settings(email_mode="api", email_provider="sendgrid"))

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="EMAIL_MODE"):
            EmailSender.from_settings(_settings(email_mode="pigeon"))


def test_get_email_sender_is_cached():
    assert get_email_sender() is get_email_sender()


async def test_stub_sender_records_messages():
    stub = StubEmailSender()
    message_id = await stub.send_email(
        OutboundEmail(from_email="a@b.de", to="c@d.de", subject="s", text="t")
    )
    assert message_id.startswith("console-")
    assert len(stub.sent) == 1

# Fin del archivo backend/tests/shared/integrations/test_email_sender_factory.py
