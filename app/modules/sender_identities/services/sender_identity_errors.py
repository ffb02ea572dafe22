# -*- coding: utf-8 -*-
"""
backend/app/modules/sender_identities/services/sender_identity_errors.py

Excepciones de identidades de remitente, con `code` y `status_code`.
"""

from typing import Optional


class SenderIdentityError(Exception):
    code = "SENDER_IDENTITY_ERROR"
    status_code = 500

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.__class__.__doc__ or self.code
        super().__init__(self.message)


class InvalidSenderEmail(SenderIdentityError):
    """Invalid email."""
    code = "invalid_email"
    status_code = 400


class SenderIdentityNotFound(SenderIdentityError):
    """Sender identity not found."""
    code = "not_found"
    status_code = 404


class SenderNotVerified(SenderIdentityError):
    """Sender identity not verified."""
    code = "sender_not_verified"
    status_code = 400


class SenderAlreadyVerified(SenderIdentityError):
    """Already verified."""
    code = "already_verified"
    status_code = 400


class SenderIdentityDisabled(SenderIdentityError):
    """Sender identity disabled."""
    code = "sender_identity_disabled"
    status_code = 400


class ResendCooldownActive(SenderIdentityError):
    """Cooldown active."""
    code = "cooldown_active"
    status_code = 429


class SenderIdentityLimitReached(SenderIdentityError):
    """Maximum number of verified sender identities reached."""
    code = "sender_identity_limit"
    status_code = 400


class InvalidVerificationToken(SenderIdentityError):
    """Invalid verification token."""
    code = "invalid_token"
    status_code = 400


class VerificationTokenExpired(SenderIdentityError):
    """Verification token expired or already used."""
    code = "token_expired"
    status_code = 400


__all__ = [
    "SenderIdentityError",
    "InvalidSenderEmail",
    "SenderIdentityNotFound",
    "SenderNotVerified",
    "SenderAlreadyVerified",
    "SenderIdentityDisabled",
    "ResendCooldownActive",
    "SenderIdentityLimitReached",
    "InvalidVerificationToken",
    "VerificationTokenExpired",
]
