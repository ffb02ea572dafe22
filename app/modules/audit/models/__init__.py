# -*- coding: utf-8 -*-
"""
backend/app/modules/audit/models/__init__.py
"""

from .audit_event_models import AuditEvent

__all__ = ["AuditEvent"]
