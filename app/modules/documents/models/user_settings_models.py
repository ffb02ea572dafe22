# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/models/user_settings_models.py

Datos del emisor (empresa, banco, pie) por usuario.

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from app.shared.database import Base


class UserSettings(Base):
    __tablename__ = "user_settings"

    user_id = Column(UUID(as_uuid=False), primary_key=True)
    company_name = Column(String(255), nullable=True)
    name = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    tax_id = Column(String(64), nullable=True)
    iban = Column(String(64), nullable=True)
    bic = Column(String(32), nullable=True)
    bank_name = Column(String(255), nullable=True)
    footer_text = Column(Text, nullable=True)
    email = Column(String(320), nullable=True)
    currency = Column(String(3), nullable=False, server_default="EUR")
    locale = Column(String(16), nullable=False, server_default="de-DE")
    default_sender_identity_id = Column(UUID(as_uuid=False), nullable=True)

    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


__all__ = ["UserSettings"]
