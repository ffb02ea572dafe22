# -*- coding: utf-8 -*-
"""
backend/app/modules/sender_identities/enums/__init__.py
"""

from .sender_identity_status_enum import SenderIdentityStatus

__all__ = ["SenderIdentityStatus"]
