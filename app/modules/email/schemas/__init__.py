# -*- coding: utf-8 -*-
"""
backend/app/modules/email/schemas/__init__.py
"""

from .email_schemas import (
    MAX_MESSAGE_LENGTH,
    MAX_SUBJECT_LENGTH,
    EmailSendCommand,
    EmailSendRequest,
    EmailSendResult,
)

__all__ = [
    "MAX_SUBJECT_LENGTH",
    "MAX_MESSAGE_LENGTH",
    "EmailSendRequest",
    "EmailSendCommand",
    "EmailSendResult",
]
