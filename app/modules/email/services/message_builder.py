# -*- coding: utf-8 -*-
"""
backend/app/modules/email/services/message_builder.py

Encabezados de los emails salientes. El remitente técnico siempre es la
dirección del sistema (EMAIL_FROM); la identidad del usuario va en el
nombre visible y en Reply-To:

    From:     "Muster GmbH via InvoiceDesk" <noreply@invoicedesk.app>
    Sender:   "InvoiceDesk" <noreply@invoicedesk.app>
    Reply-To: "Muster GmbH" <buchhaltung@muster.de>

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

from email.utils import formataddr
from typing import Iterable, Mapping, Optional

from app.shared.integrations.email_sender import EmailAttachment, OutboundEmail


def display_name_for(identity: Mapping, company_name: Optional[str] = None) -> str:
    """display_name de la identidad, luego company_name de user_settings, luego ''."""
    return (identity.get("display_name") or company_name or "").strip()


def sender_header(sender_domain_name: str, from_email: str) -> str:
    return formataddr((sender_domain_name, from_email))


def build_document_message(
    *,
    identity: Mapping,
    from_email: str,
    sender_domain_name: str,
    to: str,
    subject: str,
    text: str,
    company_name: Optional[str] = None,
    attachments: Iterable[EmailAttachment] = (),
) -> OutboundEmail:
    display = display_name_for(identity, company_name)
    return OutboundEmail(
        from_email=from_email,
        from_name=f"{display or sender_domain_name} via {sender_domain_name}",
        to=to,
        subject=subject,
        text=text,
        reply_to_email=identity.get("email"),
        reply_to_name=display or None,
        sender=sender_header(sender_domain_name, from_email),
        attachments=list(attachments),
    )


__all__ = ["display_name_for", "sender_header", "build_document_message"]
