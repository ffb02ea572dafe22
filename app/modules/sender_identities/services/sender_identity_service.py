# -*- coding: utf-8 -*-
"""
backend/app/modules/sender_identities/services/sender_identity_service.py

Ciclo de vida de una identidad de remitente:

1. request_verification(): alta/reactivación como `pending`, token de un
   solo uso (se guarda su SHA-256, válido 24h) y email de verificación
2. verify_token(): marca el token usado y la identidad `verified`
3. get_verified_identity(): compuerta para /api/email y /api/test-email
4. disable(): baja lógica (`disabled`)
5. set_default_identity(): remitente por defecto en user_settings
   (solo identidades verificadas; None lo quita)

Los límites por usuario/email/IP los aplica la capa de rutas.

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

import hashlib
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from app.shared.database.table_gateway import StorageError, TableGateway
from app.shared.integrations.email_sender import EmailSendError, IEmailSender, OutboundEmail
from app.shared.utils.email_utils import normalize_valid_email
from app.shared.utils.validators import validate_uuid
from app.modules.audit.services import AuditAction, record_audit_event
from app.modules.email.services.email_errors import EmailNotConfigured, EmailSendFailed
from app.modules.email.services.message_builder import build_document_message
from app.modules.sender_identities.enums import SenderIdentityStatus
from app.modules.sender_identities.services.sender_identity_errors import (
    InvalidSenderEmail,
    InvalidVerificationToken,
    ResendCooldownActive,
    SenderAlreadyVerified,
    SenderIdentityDisabled,
    SenderIdentityLimitReached,
    SenderIdentityNotFound,
    SenderNotVerified,
    VerificationTokenExpired,
)

logger = logging.getLogger(__name__)

IDENTITIES_TABLE = "sender_identities"
TOKENS_TABLE = "sender_identity_tokens"
SETTINGS_TABLE = "user_settings"
ENTITY_TYPE = "sender_identity"

TOKEN_TTL = timedelta(hours=24)
RESEND_COOLDOWN = timedelta(seconds=60)
MAX_VERIFIED_IDENTITIES = 5

VERIFICATION_SUBJECT = "Bitte bestaetigen Sie Ihre Absenderadresse"

_IDENTITY_COLUMNS = (
    "id", "user_id", "email", "display_name", "status",
    "verified_at", "last_used_at", "last_verification_sent_at",
)


def generate_token() -> str:
    return secrets.token_urlsafe(32)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def normalize_identity_email(email: Optional[str]) -> str:
    """Email normalizado; InvalidSenderEmail si no sirve."""
    normalized = normalize_valid_email(email)
    if not normalized:
        raise InvalidSenderEmail()
    return normalized


def build_verification_text(verification_url: str, display_name: Optional[str] = None) -> str:
    return "\n".join([
        f"Hallo{f' {display_name}' if display_name else ''},",
        "",
        "bitte bestaetigen Sie Ihre Absenderadresse fuer den Rechnungsversand.",
        "",
        verification_url,
        "",
        "Der Link ist 24 Stunden gueltig und nur einmal verwendbar.",
    ])


def _parse_ts(value) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


class SenderIdentityService:
    def __init__(
        self,
        gateway: TableGateway,
        email_sender: IEmailSender,
        *,
        app_settings=None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if app_settings is None:
            from app.shared.config import settings as app_settings
        self.gateway = gateway
        self.email_sender = email_sender
        self.settings = app_settings
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _now(self) -> datetime:
        return self._clock()

    def require_from_email(self) -> str:
        from_email = self.settings.email_from
        if not from_email:
            raise EmailNotConfigured()
        return from_email

    # ----- lectura -----
    async def get_identity(self, user_id: str, identity_id: Optional[str]) -> dict:
        if not identity_id or not validate_uuid(str(identity_id)):
            raise SenderIdentityNotFound()
        row = await self.gateway.select_one(
            IDENTITIES_TABLE,
            {"id": str(identity_id), "user_id": str(user_id)},
            columns=_IDENTITY_COLUMNS,
        )
        if not row:
            raise SenderIdentityNotFound()
        return row

    async def get_verified_identity(self, user_id: str, identity_id: Optional[str]) -> dict:
        identity = await self.get_identity(user_id, identity_id)
        if identity.get("status") != SenderIdentityStatus.VERIFIED:
            raise SenderNotVerified()
        return identity

    async def list_identities(self, user_id: str) -> list[dict]:
        return await self.gateway.select_many(
            IDENTITIES_TABLE,
            {"user_id": str(user_id)},
            columns=_IDENTITY_COLUMNS,
            order_by="created_at",
            descending=True,
        )

    # ----- alta / verificación -----
    async def request_verification(
        self,
        user_id: str,
        email: str,
        display_name: Optional[str] = None,
        *,
        request_ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> dict:
        """`email` ya normalizado (normalize_identity_email)."""
        display_name = (display_name or "").strip() or None
        existing = await self.gateway.select_one(
            IDENTITIES_TABLE,
            {"user_id": str(user_id), "email": email},
            columns=_IDENTITY_COLUMNS,
        )
        if existing and existing.get("status") == SenderIdentityStatus.VERIFIED:
            return existing

        self.require_from_email()
        now_iso = self._now().isoformat()

        if existing:
            values = {
                "display_name": display_name,
                "status": SenderIdentityStatus.PENDING.value,
                "updated_at": now_iso,
            }
            await self.gateway.update_where(IDENTITIES_TABLE, values, {"id": existing["id"]})
            identity = {**existing, **values}
        else:
            identity = await self.gateway.insert_row(
                IDENTITIES_TABLE,
                {
                    "user_id": str(user_id),
                    "email": email,
                    "display_name": display_name,
                    "status": SenderIdentityStatus.PENDING.value,
                },
            )
            await record_audit_event(
                self.gateway,
                user_id=user_id,
                action=AuditAction.SENDER_IDENTITY_CREATED,
                entity_type=ENTITY_TYPE,
                entity_id=identity["id"],
                meta={"email": email},
            )

        sent_at = await self._issue_verification(identity, user_id, request_ip, user_agent)
        identity["last_verification_sent_at"] = sent_at
        return identity

    async def resend_verification(
        self,
        user_id: str,
        identity_id: str,
        *,
        request_ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> str:
        identity = await self.get_identity(user_id, identity_id)
        if identity.get("status") == SenderIdentityStatus.VERIFIED:
            raise SenderAlreadyVerified()
        if identity.get("status") == SenderIdentityStatus.DISABLED:
            raise SenderIdentityDisabled()

        last_sent = _parse_ts(identity.get("last_verification_sent_at"))
        if last_sent and self._now() - last_sent < RESEND_COOLDOWN:
            raise ResendCooldownActive()

        self.require_from_email()
        return await self._issue_verification(identity, user_id, request_ip, user_agent)

    async def _issue_verification(
        self,
        identity: dict,
        user_id: str,
        request_ip: Optional[str],
        user_agent: Optional[str],
    ) -> str:
        now = self._now()
        token = generate_token()

        await self.gateway.insert_row(
            TOKENS_TABLE,
            {
                "sender_identity_id": identity["id"],
                "token_hash": hash_token(token),
                "expires_at": (now + TOKEN_TTL).isoformat(),
                "request_ip": request_ip,
                "user_agent": user_agent,
            },
        )
        await self.gateway.update_where(
            IDENTITIES_TABLE,
            {"last_verification_sent_at": now.isoformat()},
            {"id": identity["id"]},
        )

        base_url = self.settings.app_base_url.rstrip("/")
        url = f"{base_url}/api/sender-identities/verify?token={token}"
        message = OutboundEmail(
            from_email=self.require_from_email(),
            from_name=self.settings.sender_domain_name,
            to=identity["email"],
            subject=VERIFICATION_SUBJECT,
            text=build_verification_text(url, identity.get("display_name")),
        )
        try:
            await self.email_sender.send_email(message)
        except EmailSendError as e:
            raise EmailSendFailed(str(e)) from e

        await record_audit_event(
            self.gateway,
            user_id=user_id,
            action=AuditAction.SENDER_IDENTITY_VERIFICATION_SENT,
            entity_type=ENTITY_TYPE,
            entity_id=identity["id"],
            meta={"email": identity["email"]},
        )
        logger.info("[SenderIdentity] verificación enviada identity=%s", identity["id"])
        return now.isoformat()

    async def verify_token(self, token: Optional[str]) -> dict:
        """
        Raises:
            InvalidVerificationToken, VerificationTokenExpired, SenderIdentityLimitReached
        """
        if not token:
            raise InvalidVerificationToken()

        token_row = await self.gateway.select_one(
            TOKENS_TABLE,
            {"token_hash": hash_token(token)},
            columns=("id", "sender_identity_id", "used_at", "expires_at"),
        )
        if not token_row:
            raise InvalidVerificationToken()

        now = self._now()
        expires_at = _parse_ts(token_row.get("expires_at"))
        if token_row.get("used_at") or (expires_at and expires_at <= now):
            raise VerificationTokenExpired()

        identity = await self.gateway.select_one(
            IDENTITIES_TABLE,
            {"id": token_row["sender_identity_id"]},
            columns=_IDENTITY_COLUMNS,
        )
        if not identity:
            raise InvalidVerificationToken()

        if identity.get("status") != SenderIdentityStatus.VERIFIED:
            verified = await self.gateway.select_many(
                IDENTITIES_TABLE,
                {"user_id": identity["user_id"], "status": SenderIdentityStatus.VERIFIED.value},
                columns=("id",),
            )
            if len(verified) >= MAX_VERIFIED_IDENTITIES:
                raise SenderIdentityLimitReached()

        now_iso = now.isoformat()
        consumed = await self.gateway.update_where(
            TOKENS_TABLE,
            {"used_at": now_iso},
            {"id": token_row["id"], "used_at": None},
        )
        if consumed == 0:
            # Otro request usó el token entre la lectura y el update
            raise VerificationTokenExpired()

        values = {
            "status": SenderIdentityStatus.VERIFIED.value,
            "verified_at": now_iso,
            "updated_at": now_iso,
        }
        await self.gateway.update_where(IDENTITIES_TABLE, values, {"id": identity["id"]})
        await record_audit_event(
            self.gateway,
            user_id=identity["user_id"],
            action=AuditAction.SENDER_IDENTITY_VERIFIED,
            entity_type=ENTITY_TYPE,
            entity_id=identity["id"],
        )
        logger.info("[SenderIdentity] verificada identity=%s", identity["id"])
        return {**identity, **values}

    async def disable(self, user_id: str, identity_id: str) -> None:
        identity = await self.get_identity(user_id, identity_id)
        await self.gateway.update_where(
            IDENTITIES_TABLE,
            {"status": SenderIdentityStatus.DISABLED.value, "updated_at": self._now().isoformat()},
            {"id": identity["id"], "user_id": str(user_id)},
        )
        await record_audit_event(
            self.gateway,
            user_id=user_id,
            action=AuditAction.SENDER_IDENTITY_DISABLED,
            entity_type=ENTITY_TYPE,
            entity_id=identity["id"],
        )

    async def set_default_identity(self, user_id: str, identity_id: Optional[str]) -> Optional[str]:
        if identity_id:
            identity_id = (await self.get_verified_identity(user_id, identity_id))["id"]
        else:
            identity_id = None

        affected = await self.gateway.update_where(
            SETTINGS_TABLE,
            {"default_sender_identity_id": identity_id},
            {"user_id": str(user_id)},
        )
        if affected == 0:
            logger.info("[SenderIdentity] user_settings sin fila para user=%s", user_id)
        await record_audit_event(
            self.gateway,
            user_id=user_id,
            action=AuditAction.DEFAULT_SENDER_IDENTITY_UPDATED,
            entity_type="settings",
            meta={"senderIdentityId": identity_id},
        )
        return identity_id

    async def mark_used(self, identity_id: str) -> None:
        """Estampa last_used_at tras un envío; un fallo solo se loguea."""
        try:
            await self.gateway.update_where(
                IDENTITIES_TABLE,
                {"last_used_at": self._now().isoformat()},
                {"id": str(identity_id)},
            )
        except StorageError as e:
            logger.warning("[SenderIdentity] last_used_at no actualizado identity=%s: %s", identity_id, e.message)

    # ----- test email -----
    async def send_test_email(self, user_id: str, identity_id: Optional[str], to: Optional[str] = None) -> str:
        identity = await self.get_verified_identity(user_id, identity_id)
        recipient = normalize_identity_email(to) if to else identity["email"]
        domain = self.settings.sender_domain_name

        message = build_document_message(
            identity=identity,
            from_email=self.require_from_email(),
            sender_domain_name=domain,
            to=recipient,
            subject=f"Testmail {domain}",
            text="Test erfolgreich.",
        )
        try:
            message_id = await self.email_sender.send_email(message)
        except EmailSendError as e:
            raise EmailSendFailed(str(e)) from e

        await record_audit_event(
            self.gateway,
            user_id=user_id,
            action=AuditAction.SENDER_IDENTITY_TEST_EMAIL_SENT,
            entity_type=ENTITY_TYPE,
            entity_id=identity["id"],
            meta={"to": recipient, "message_id": message_id},
        )
        return message_id


__all__ = [
    "SenderIdentityService",
    "IDENTITIES_TABLE",
    "TOKENS_TABLE",
    "SETTINGS_TABLE",
    "TOKEN_TTL",
    "RESEND_COOLDOWN",
    "MAX_VERIFIED_IDENTITIES",
    "VERIFICATION_SUBJECT",
    "generate_token",
    "hash_token",
    "normalize_identity_email",
    "build_verification_text",
]
# Fin del archivo backend/app/modules/sender_identities/services/sender_identity_service.py
