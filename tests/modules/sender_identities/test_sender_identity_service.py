# -*- coding: utf-8 -*-
"""
backend/tests/modules/sender_identities/test_sender_identity_service.py

Ciclo de vida: alta pending → token de un solo uso → verified; reenvío con
cooldown; tope de identidades verificadas; baja lógica.

Autor: InvoiceDesk
Creado: 2025-12-24
"""

from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qs, urlparse

import pytest

from app.modules.sender_identities.services import (
    InvalidSenderEmail,
    InvalidVerificationToken,
    ResendCooldownActive,
    SenderAlreadyVerified,
    SenderIdentityLimitReached,
    SenderIdentityNotFound,
    SenderIdentityService,
    SenderNotVerified,
    VerificationTokenExpired,
    hash_token,
    normalize_identity_email,
)
from app.modules.sender_identities.services.sender_identity_service import (
    MAX_VERIFIED_IDENTITIES,
    TOKEN_TTL,
)


class FakeClock:
    def __init__(self):
        self.now = datetime(2025, 12, 20, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(gateway, stub_sender, clock):
    return SenderIdentityService(gateway, stub_sender, clock=clock)


def _token_from(message) -> str:
    url = next(line for line in message.text.splitlines() if line.startswith("http"))
    return parse_qs(urlparse(url).query)["token"][0]


class TestRequestVerification:
    async def test_creates_pending_identity_and_sends_link(self, service, gateway, stub_sender, user_id):
        identity = await service.request_verification(user_id, "buchhaltung@muster.de", " Muster GmbH ")

        assert identity["status"] == "pending"
        assert identity["display_name"] == "Muster GmbH"
        assert identity["last_verification_sent_at"]

        assert len(stub_sender.sent) == 1
        token = _token_from(stub_sender.sent[0])
        token_row = gateway.rows("sender_identity_tokens")[0]
        assert token_row["token_hash"] == hash_token(token)
        assert token not in str(token_row)

        actions = [e["action"] for e in gateway.rows("audit_events")]
        assert actions == ["sender_identity_created", "sender_identity_verification_sent"]

    async def test_verified_identity_is_returned_untouched(self, service, stub_sender, user_id):
        identity = await service.request_verification(user_id, "max@muster.de")

        assert identity["status"] == "verified"
        assert stub_sender.sent == []

    def test_email_normalization(self):
        assert normalize_identity_email(" Max@Muster.DE ") == "max@muster.de"
        with pytest.raises(InvalidSenderEmail):
            normalize_identity_email("max@")


class TestVerifyToken:
    async def test_token_is_single_use(self, service, stub_sender, user_id):
        await service.request_verification(user_id, "buchhaltung@muster.de")
        token = _token_from(stub_sender.sent[0])

        identity = await service.verify_token(token)
        assert identity["status"] == "verified"
        assert identity["verified_at"]

        with pytest.raises(VerificationTokenExpired):
            await service.verify_token(token)

    async def test_expired_token(self, service, stub_sender, clock, user_id):
        await service.request_verification(user_id, "buchhaltung@muster.de")
        token = _token_from(stub_sender.sent[0])

        clock.now += TOKEN_TTL + timedelta(seconds=1)

        with pytest.raises(VerificationTokenExpired):
            await service.verify_token(token)

    @pytest.mark.parametrize("token", [None, "", "unknown-token"])
    async def test_invalid_token(self, service, token):
        with pytest.raises(InvalidVerificationToken):
            await service.verify_token(token)

    async def test_verified_limit(self, service, gateway, stub_sender, user_id):
        for i in range(MAX_VERIFIED_IDENTITIES - 1):
            gateway.rows("sender_identities").append(
                {"id": f"extra-{i}", "user_id": user_id, "email": f"x{i}@muster.de", "status": "verified"}
            )
        await service.request_verification(user_id, "neu@muster.de")
        token = _token_from(stub_sender.sent[0])

        with pytest.raises(SenderIdentityLimitReached):
            await service.verify_token(token)


class TestResendAndDisable:
    async def test_resend_respects_cooldown(self, service, clock, user_id):
        identity = await service.request_verification(user_id, "buchhaltung@muster.de")

        with pytest.raises(ResendCooldownActive):
            await service.resend_verification(user_id, identity["id"])

        clock.now += timedelta(seconds=61)
        sent_at = await service.resend_verification(user_id, identity["id"])
        assert sent_at == clock.now.isoformat()

    async def test_resend_verified_identity(self, service, user_id, identity_id):
        with pytest.raises(SenderAlreadyVerified):
            await service.resend_verification(user_id, identity_id)

    async def test_disabled_identity_cannot_send(self, service, gateway, user_id, identity_id):
        await service.disable(user_id, identity_id)

        assert gateway.rows("sender_identities")[0]["status"] == "disabled"
        with pytest.raises(SenderNotVerified):
            await service.get_verified_identity(user_id, identity_id)


async def test_test_email_goes_to_identity_by_default(service, stub_sender, user_id, identity_id):
    message_id = await service.send_test_email(user_id, identity_id)

    assert message_id.startswith("console-")
    assert stub_sender.sent[0].to == "max@muster.de"
    assert stub_sender.sent[0].reply_to_email == "max@muster.de"


class TestDefaultIdentity:
    async def test_sets_verified_identity(self, service, gateway, user_id, identity_id):
        result = await service.set_default_identity(user_id, identity_id)

        assert result == identity_id
        assert gateway.rows("user_settings")[0]["default_sender_identity_id"] == identity_id
        event = gateway.rows("audit_events")[-1]
        assert event["action"] == "default_sender_identity_updated"
        assert event["entity_type"] == "settings"
        assert event["meta"] == {"senderIdentityId": identity_id}

    async def test_null_clears_default(self, service, gateway, user_id, identity_id):
        await service.set_default_identity(user_id, identity_id)

        assert await service.set_default_identity(user_id, None) is None
        assert gateway.rows("user_settings")[0]["default_sender_identity_id"] is None

    async def test_pending_identity_is_rejected(self, service, gateway, user_id, identity_id):
        gateway.rows("sender_identities")[0]["status"] = "pending"

        with pytest.raises(SenderNotVerified):
            await service.set_default_identity(user_id, identity_id)
        assert gateway.updates_for("user_settings") == []

    async def test_other_users_identity_is_not_found(self, service, gateway, other_user_id, identity_id):
        with pytest.raises(SenderIdentityNotFound):
            await service.set_default_identity(other_user_id, identity_id)
        assert gateway.rows("audit_events") == []

# Fin del archivo backend/tests/modules/sender_identities/test_sender_identity_service.py
