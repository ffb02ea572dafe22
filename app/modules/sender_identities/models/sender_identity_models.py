# -*- coding: utf-8 -*-
"""
backend/app/modules/sender_identities/models/sender_identity_models.py

Modelos SQLAlchemy:
- SenderIdentity: (user_id, email) único; status pending|verified|disabled
- SenderIdentityToken: solo se guarda el SHA-256 del token de verificación

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from uuid import uuid4
from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from app.shared.database import Base
from app.modules.sender_identities.enums import SenderIdentityStatus


class SenderIdentity(Base):
    __tablename__ = "sender_identities"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(UUID(as_uuid=False), nullable=False, index=True)
    email = Column(String(320), nullable=False)
    display_name = Column(String(255), nullable=True)
    status = Column(String(16), nullable=False, server_default=SenderIdentityStatus.PENDING.value)

    verified_at = Column(DateTime(timezone=True), nullable=True)
    last_used_at = Column(DateTime(timezone=True), nullable=True)
    last_verification_sent_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("user_id", "email", name="uq_sender_identities_user_email"),
        CheckConstraint("status IN ('pending','verified','disabled')", name="status_valid"),
    )

    def __repr__(self):
        return f"<SenderIdentity(id={self.id}, email={self.email}, status={self.status})>"


class SenderIdentityToken(Base):
    __tablename__ = "sender_identity_tokens"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid4()))
    sender_identity_id = Column(
        UUID(as_uuid=False),
        ForeignKey("sender_identities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token_hash = Column(String(64), nullable=False, unique=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    used_at = Column(DateTime(timezone=True), nullable=True)
    request_ip = Column(String(64), nullable=True)
    user_agent = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


__all__ = ["SenderIdentity", "SenderIdentityToken"]
# Fin del archivo backend/app/modules/sender_identities/models/sender_identity_models.py
