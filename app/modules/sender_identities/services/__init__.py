# -*- coding: utf-8 -*-
"""
backend/app/modules/sender_identities/services/__init__.py
"""

from .sender_identity_errors import *  # noqa: F401,F403
from .sender_identity_errors import __all__ as _errors_all
from .sender_identity_service import (
    SenderIdentityService,
    generate_token,
    hash_token,
    normalize_identity_email,
)

__all__ = [
    *_errors_all,
    "SenderIdentityService",
    "generate_token",
    "hash_token",
    "normalize_identity_email",
]
