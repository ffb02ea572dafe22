# -*- coding: utf-8 -*-
"""
backend/app/modules/sender_identities/schemas/__init__.py
"""

from .sender_identity_schemas import (
    DefaultSenderIdentityRequest,
    SenderIdentityCreateRequest,
    SenderIdentityOut,
    TestEmailRequest,
    to_identity_out,
)

__all__ = [
    "DefaultSenderIdentityRequest",
    "SenderIdentityCreateRequest",
    "SenderIdentityOut",
    "TestEmailRequest",
    "to_identity_out",
]
