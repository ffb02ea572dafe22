# -*- coding: utf-8 -*-
"""
backend/app/modules/audit/services/__init__.py
"""

from .audit_service import AUDIT_EVENTS_TABLE, AuditAction, record_audit_event

__all__ = ["AUDIT_EVENTS_TABLE", "AuditAction", "record_audit_event"]
