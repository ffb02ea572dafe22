# -*- coding: utf-8 -*-
"""
backend/app/modules/audit/models/audit_event_models.py

Modelo SQLAlchemy de eventos de auditoría (append-only).

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from uuid import uuid4
from sqlalchemy import Column, DateTime, Index, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.sql import func

from app.shared.database import Base


class AuditEvent(Base):
    __tablename__ = "audit_events"

    id = Column(UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(UUID(as_uuid=False), nullable=True, index=True)
    action = Column(String(64), nullable=False)
    entity_type = Column(String(32), nullable=True)
    entity_id = Column(UUID(as_uuid=False), nullable=True)
    meta = Column(JSONB, nullable=False, server_default="{}")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        Index("idx_audit_events_entity", entity_type, entity_id),
    )

    def __repr__(self):
        return f"<AuditEvent(action={self.action}, entity={self.entity_type}:{self.entity_id})>"


__all__ = ["AuditEvent"]
# Fin del archivo backend/app/modules/audit/models/audit_event_models.py
