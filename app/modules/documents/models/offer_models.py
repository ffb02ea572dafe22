# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/models/offer_models.py

Modelo SQLAlchemy de ofertas (Angebote). Las ofertas no se bloquean;
solo llevan metadatos de envío.

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from uuid import uuid4
from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.sql import func

from app.shared.database import Base


class Offer(Base):
    __tablename__ = "offers"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(UUID(as_uuid=False), nullable=False, index=True)
    client_id = Column(UUID(as_uuid=False), nullable=False)
    project_id = Column(UUID(as_uuid=False), nullable=True)
    invoice_id = Column(UUID(as_uuid=False), nullable=True)

    number = Column(String(64), nullable=True)
    date = Column(Date, nullable=False, server_default=func.current_date())
    valid_until = Column(Date, nullable=True)

    positions = Column(JSONB, nullable=False, server_default="[]")
    intro_text = Column(Text, nullable=False, server_default="")
    footer_text = Column(Text, nullable=False, server_default="")
    vat_rate = Column(Numeric(5, 2), nullable=False, server_default="19")
    currency = Column(String(3), nullable=False, server_default="EUR")

    status = Column(String(16), nullable=False, server_default="DRAFT")

    sent_at = Column(DateTime(timezone=True), nullable=True)
    last_sent_at = Column(DateTime(timezone=True), nullable=True)
    last_sent_to = Column(String(320), nullable=True)
    sent_count = Column(Integer, nullable=False, server_default="0")
    sent_via = Column(String(16), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint(
            "status IN ('DRAFT','SENT','ACCEPTED','REJECTED','INVOICED')",
            name="status_valid",
        ),
    )

    def __repr__(self):
        return f"<Offer(id={self.id}, number={self.number}, status={self.status})>"


__all__ = ["Offer"]
