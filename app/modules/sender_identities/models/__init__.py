# -*- coding: utf-8 -*-
"""
backend/app/modules/sender_identities/models/__init__.py
"""

from .sender_identity_models import SenderIdentity, SenderIdentityToken

__all__ = ["SenderIdentity", "SenderIdentityToken"]
