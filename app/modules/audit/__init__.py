# -*- coding: utf-8 -*-
"""
backend/app/modules/audit/__init__.py

Eventos de auditoría (envíos, identidades de remitente).
"""

__all__ = []
