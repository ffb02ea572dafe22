# -*- coding: utf-8 -*-
"""
backend/app/modules/email/routes/deps.py

Dependencias inyectables del envío de documentos.
Los tests las overridean con un gateway en memoria y StubEmailSender.

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

from fastapi import Depends

from app.shared.database.database import get_table_gateway
from app.shared.database.table_gateway import SqlAlchemyTableGateway
from app.shared.integrations.email_sender import IEmailSender, get_email_sender
from app.modules.email.services.email_send_service import DocumentEmailService


async def get_mailer() -> IEmailSender:
    return get_email_sender()


async def get_document_email_service(
    gateway: SqlAlchemyTableGateway = Depends(get_table_gateway),
    email_sender: IEmailSender = Depends(get_mailer),
) -> DocumentEmailService:
    return DocumentEmailService(gateway, email_sender)


__all__ = ["get_mailer", "get_document_email_service"]
# Fin del archivo backend/app/modules/email/routes/deps.py
