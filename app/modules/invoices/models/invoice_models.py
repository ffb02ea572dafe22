# -*- coding: utf-8 -*-
"""
backend/app/modules/invoices/models/invoice_models.py

Modelo SQLAlchemy de facturas.

Bloqueo:
- is_locked / finalized_at los escribe solo lock_invoice_after_send.
- La inmutabilidad del contenido la impone el trigger
  trg_prevent_locked_invoice_update (database/migrations).

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from uuid import uuid4
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.sql import func

from app.shared.database import Base
from app.modules.invoices.enums import InvoiceStatus


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(UUID(as_uuid=False), nullable=False, index=True)
    client_id = Column(UUID(as_uuid=False), nullable=False)
    project_id = Column(UUID(as_uuid=False), nullable=True)
    offer_id = Column(UUID(as_uuid=False), nullable=True)

    number = Column(String(64), nullable=True)
    date = Column(Date, nullable=False, server_default=func.current_date())
    due_date = Column(Date, nullable=True)
    payment_date = Column(Date, nullable=True)

    positions = Column(JSONB, nullable=False, server_default="[]")
    intro_text = Column(Text, nullable=False, server_default="")
    footer_text = Column(Text, nullable=False, server_default="")
    vat_rate = Column(Numeric(5, 2), nullable=False, server_default="19")
    is_small_business = Column(Boolean, nullable=False, server_default="false")
    small_business_note = Column(Text, nullable=True)

    status = Column(String(16), nullable=False, server_default=InvoiceStatus.DRAFT.value)

    # Bloqueo / finalización
    is_locked = Column(Boolean, nullable=False, server_default="false")
    finalized_at = Column(DateTime(timezone=True), nullable=True)

    # Metadatos de envío
    sent_at = Column(DateTime(timezone=True), nullable=True)
    last_sent_at = Column(DateTime(timezone=True), nullable=True)
    last_sent_to = Column(String(320), nullable=True)
    sent_count = Column(Integer, nullable=False, server_default="0")
    sent_via = Column(String(16), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint(
            "status IN ('DRAFT','ISSUED','SENT','PAID','CANCELED')",
            name="status_valid",
        ),
        Index("idx_invoices_user_status", user_id, status),
    )

    def __repr__(self):
        return f"<Invoice(id={self.id}, number={self.number}, status={self.status}, locked={self.is_locked})>"


__all__ = ["Invoice"]
# Fin del archivo backend/app/modules/invoices/models/invoice_models.py
