# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/dependencies.py

Dependencias de autenticación JWT para FastAPI.

Provee:
- validate_jwt_token: core de validación (única fuente de verdad); `sub` debe ser UUID
- get_current_user_id: 401 NOT_AUTHENTICATED si falta o no sirve el token
- get_optional_user_id: None en lugar de 401; permite aplicar el rate limit
  por IP antes de autenticar

Autor: InvoiceDesk
Fecha: 2025-12-21
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends

from app.shared.utils.api_errors import not_authenticated
from app.shared.utils.validators import validate_uuid

from .security import oauth2_scheme, decode_access_token, TokenDecodeError

logger = logging.getLogger(__name__)


def validate_jwt_token(token: Optional[str]) -> str:
    """
    Valida un JWT y extrae el user_id (claim 'sub').

    Raises:
        ApiError 401 NOT_AUTHENTICATED
    """
    if not token:
        raise not_authenticated()
    try:
        payload = decode_access_token(token)
    except TokenDecodeError as e:
        logger.debug("[Auth] token rechazado: %s", e)
        raise not_authenticated() from e
    sub = str(payload.get("sub") or "")
    if not validate_uuid(sub):
        logger.debug("[Auth] sub no es un UUID")
        raise not_authenticated()
    return sub


async def get_current_user_id(
    token: Optional[str] = Depends(oauth2_scheme),
) -> str:
    """Dependencia de autenticación para endpoints protegidos."""
    return validate_jwt_token(token)


async def get_optional_user_id(
    token: Optional[str] = Depends(oauth2_scheme),
) -> Optional[str]:
    if not token:
        return None
    try:
        sub = str(decode_access_token(token).get("sub") or "")
    except TokenDecodeError:
        return None
    return sub if validate_uuid(sub) else None


__all__ = [
    "get_current_user_id",
    "get_optional_user_id",
    "validate_jwt_token",
]
