# -*- coding: utf-8 -*-
"""
backend/app/modules/sender_identities/routes/sender_identity_routes.py

Endpoints de identidades de remitente (prefijo /sender-identities):

- POST   /                   alta + email de verificación
- GET    /                   listado del usuario
- GET    /verify?token=...   verificación por token de un solo uso
- POST   /{identity_id}/resend
- DELETE /{identity_id}

Límites (RATE_LIMIT_WINDOW_MS): 5 altas por usuario, 3 por email destino,
20 por IP; verify 60 por minuto por IP.

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from app.shared.config import settings
from app.shared.database.table_gateway import StorageError
from app.shared.http_utils.request_meta import get_client_ip, get_user_agent
from app.shared.security import check_rate_limit
from app.shared.utils.api_errors import ApiError, api_error_from_domain
from app.modules.auth.dependencies import get_current_user_id
from app.modules.email.services import EmailError
from app.modules.sender_identities.routes.deps import get_sender_identity_service
from app.modules.sender_identities.schemas import SenderIdentityCreateRequest, to_identity_out
from app.modules.sender_identities.services import (
    SenderIdentityError,
    SenderIdentityService,
    normalize_identity_email,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sender-identities"])

CREATE_USER_LIMIT = 5
CREATE_EMAIL_LIMIT = 3
CREATE_IP_LIMIT = 20
VERIFY_IP_LIMIT = 60
VERIFY_WINDOW_MS = 60_000


def identity_error_to_api(exc: Exception) -> ApiError:
    if isinstance(exc, StorageError):
        return ApiError(500, "STORAGE_ERROR", exc.message)
    return api_error_from_domain(exc)


async def enforce_identity_limits(request: Request, user_id: str, email: Optional[str] = None) -> None:
    window_ms = settings.rate_limit_window_ms
    await check_rate_limit("sender_identity", "user", user_id, CREATE_USER_LIMIT, window_ms)
    if email:
        await check_rate_limit("sender_identity", "email", email, CREATE_EMAIL_LIMIT, window_ms)
    await check_rate_limit("sender_identity", "ip", get_client_ip(request), CREATE_IP_LIMIT, window_ms)


@router.post("", summary="Registrar identidad de remitente")
async def create_sender_identity(
    payload: SenderIdentityCreateRequest,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    service: SenderIdentityService = Depends(get_sender_identity_service),
):
    try:
        email = normalize_identity_email(payload.email)
        await enforce_identity_limits(request, user_id, email)
        identity = await service.request_verification(
            user_id,
            email,
            payload.display_name,
            request_ip=get_client_ip(request),
            user_agent=get_user_agent(request),
        )
    except (SenderIdentityError, EmailError, StorageError) as e:
        raise identity_error_to_api(e) from e

    return {"ok": True, "identity": to_identity_out(identity)}


@router.get("", summary="Listar identidades de remitente")
async def list_sender_identities(
    user_id: str = Depends(get_current_user_id),
    service: SenderIdentityService = Depends(get_sender_identity_service),
):
    try:
        rows = await service.list_identities(user_id)
    except StorageError as e:
        raise identity_error_to_api(e) from e
    return {"ok": True, "items": [to_identity_out(r) for r in rows]}


@router.get("/verify", summary="Verificar identidad por token")
async def verify_sender_identity(
    request: Request,
    token: Optional[str] = Query(default=None),
    service: SenderIdentityService = Depends(get_sender_identity_service),
):
    await check_rate_limit(
        "sender_identity_verify", "ip", get_client_ip(request), VERIFY_IP_LIMIT, VERIFY_WINDOW_MS
    )
    try:
        identity = await service.verify_token(token)
    except (SenderIdentityError, StorageError) as e:
        raise identity_error_to_api(e) from e
    return {"ok": True, "identity": to_identity_out(identity)}


@router.post("/{identity_id}/resend", summary="Reenviar email de verificación")
async def resend_verification(
    identity_id: str,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    service: SenderIdentityService = Depends(get_sender_identity_service),
):
    try:
        await enforce_identity_limits(request, user_id)
        sent_at = await service.resend_verification(
            user_id,
            identity_id,
            request_ip=get_client_ip(request),
            user_agent=get_user_agent(request),
        )
    except (SenderIdentityError, EmailError, StorageError) as e:
        raise identity_error_to_api(e) from e
    return {"ok": True, "lastVerificationSentAt": sent_at}


@router.delete("/{identity_id}", summary="Desactivar identidad de remitente")
async def disable_sender_identity(
    identity_id: str,
    user_id: str = Depends(get_current_user_id),
    service: SenderIdentityService = Depends(get_sender_identity_service),
):
    try:
        await service.disable(user_id, identity_id)
    except (SenderIdentityError, StorageError) as e:
        raise identity_error_to_api(e) from e
    return {"ok": True}


__all__ = ["router", "identity_error_to_api"]
# Fin del archivo backend/app/modules/sender_identities/routes/sender_identity_routes.py
