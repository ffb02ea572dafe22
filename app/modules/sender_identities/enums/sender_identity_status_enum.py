# -*- coding: utf-8 -*-
"""
backend/app/modules/sender_identities/enums/sender_identity_status_enum.py

Valores: ('pending', 'verified', 'disabled')
"""

from enum import StrEnum


class SenderIdentityStatus(StrEnum):
    PENDING = "pending"
    VERIFIED = "verified"
    DISABLED = "disabled"


__all__ = ["SenderIdentityStatus"]
