# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/security.py

Seguridad de Auth en InvoiceDesk:
- Esquema OAuth2 (Bearer)
- Creación / decodificación de JWT (python-jose)

El login vive fuera de este backend; aquí solo se validan los tokens y el
claim `sub` es el user_id dueño de facturas, ofertas e identidades.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from app.shared.config import settings

# auto_error=False: el 401 lo arma get_current_user_id con el envelope estándar
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


class TokenDecodeError(Exception):
    """Error al decodificar/validar un token JWT."""


def create_access_token(
    subject: Union[str, int],
    expires_delta: Optional[timedelta] = None,
    **extra: Any,
) -> str:
    """Crea un JWT con claim 'sub' (user_id) y metadatos opcionales en `extra`."""
    now = datetime.now(tz=timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode: Dict[str, Any] = {
        "sub": str(subject),
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    if settings.jwt_audience:
        to_encode["aud"] = settings.jwt_audience
    if extra:
        to_encode.update(extra)
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """Decodifica y valida un JWT. Lanza TokenDecodeError si es inválido/expirado."""
    options = {"verify_aud": bool(settings.jwt_audience)}
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options=options,
        )
    except JWTError as e:
        raise TokenDecodeError("Token inválido o expirado") from e

    sub = payload.get("sub")
    if sub is None or not str(sub).strip():
        raise TokenDecodeError("Token sin 'sub'")
    return payload


__all__ = [
    "oauth2_scheme",
    "TokenDecodeError",
    "create_access_token",
    "decode_access_token",
]
# Fin del archivo backend/app/modules/auth/security.py
