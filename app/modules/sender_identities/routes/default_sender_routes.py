# -*- coding: utf-8 -*-
"""
backend/app/modules/sender_identities/routes/default_sender_routes.py

PATCH /api/settings/default_sender_identity: fija (o quita con null) la
identidad de remitente por defecto del usuario. Solo identidades
verificadas; el cambio queda en audit_events.

Autor: InvoiceDesk
Fecha: 2025-12-26
"""

from fastapi import APIRouter, Depends

from app.shared.database.table_gateway import StorageError
from app.modules.auth.dependencies import get_current_user_id
from app.modules.sender_identities.routes.deps import get_sender_identity_service
from app.modules.sender_identities.routes.sender_identity_routes import identity_error_to_api
from app.modules.sender_identities.schemas import DefaultSenderIdentityRequest
from app.modules.sender_identities.services import SenderIdentityError, SenderIdentityService

router = APIRouter(tags=["settings"])


@router.patch("/settings/default_sender_identity", summary="Fijar el remitente por defecto")
async def update_default_sender_identity(
    payload: DefaultSenderIdentityRequest,
    user_id: str = Depends(get_current_user_id),
    service: SenderIdentityService = Depends(get_sender_identity_service),
):
    try:
        identity_id = await service.set_default_identity(user_id, payload.sender_identity_id)
    except (SenderIdentityError, StorageError) as e:
        raise identity_error_to_api(e) from e
    return {"ok": True, "defaultSenderIdentityId": identity_id}


__all__ = ["router"]
# Fin del archivo backend/app/modules/sender_identities/routes/default_sender_routes.py
