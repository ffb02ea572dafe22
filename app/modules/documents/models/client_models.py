# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/models/client_models.py

Modelo SQLAlchemy de clientes (destinatarios de facturas y ofertas).
Solo lectura desde este backend.

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from uuid import uuid4
from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func

from app.shared.database import Base


class Client(Base):
    __tablename__ = "clients"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(UUID(as_uuid=False), nullable=False, index=True)
    company_name = Column(String(255), nullable=False, server_default="")
    contact_person = Column(String(255), nullable=True)
    email = Column(String(320), nullable=True)
    address = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Client(id={self.id}, company_name={self.company_name})>"


__all__ = ["Client"]
