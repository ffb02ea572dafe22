# -*- coding: utf-8 -*-
"""
backend/app/modules/invoices/models/invoice_payment_models.py

Pagos registrados contra una factura. Se pueden insertar aunque la
factura esté bloqueada; borrarlos no (trigger en BD).

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from uuid import uuid4
from sqlalchemy import Column, Date, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from app.shared.database import Base


class InvoicePayment(Base):
    __tablename__ = "invoice_payments"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid4()))
    invoice_id = Column(
        UUID(as_uuid=False),
        ForeignKey("invoices.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    user_id = Column(UUID(as_uuid=False), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    paid_on = Column(Date, nullable=False, server_default=func.current_date())
    method = Column(String(32), nullable=True)
    note = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


__all__ = ["InvoicePayment"]
# Fin del archivo backend/app/modules/invoices/models/invoice_payment_models.py
