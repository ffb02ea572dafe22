# -*- coding: utf-8 -*-
"""
backend/app/modules/sender_identities/routes/deps.py

Dependencias inyectables de identidades de remitente.
Tests pueden overridear get_sender_identity_service con un servicio sobre
un gateway en memoria y StubEmailSender.

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

from fastapi import Depends

from app.shared.database.database import get_table_gateway
from app.shared.database.table_gateway import SqlAlchemyTableGateway
from app.shared.integrations.email_sender import IEmailSender
from app.modules.email.routes.deps import get_mailer
from app.modules.sender_identities.services import SenderIdentityService


async def get_sender_identity_service(
    gateway: SqlAlchemyTableGateway = Depends(get_table_gateway),
    email_sender: IEmailSender = Depends(get_mailer),
) -> SenderIdentityService:
    return SenderIdentityService(gateway, email_sender)


__all__ = ["get_sender_identity_service"]
# Fin del archivo backend/app/modules/sender_identities/routes/deps.py
