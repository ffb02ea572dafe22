# -*- coding: utf-8 -*-
"""
backend/app/modules/sender_identities/schemas/sender_identity_schemas.py

Schemas de request/response (camelCase hacia el frontend).

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class SenderIdentityCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    display_name: Optional[str] = Field(default=None, alias="displayName")


class TestEmailRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sender_identity_id: Optional[str] = Field(default=None, alias="senderIdentityId")
    to: Optional[str] = None


class DefaultSenderIdentityRequest(BaseModel):
    """senderIdentityId null o vacío quita el remitente por defecto."""
    model_config = ConfigDict(populate_by_name=True)

    sender_identity_id: Optional[str] = Field(default=None, alias="senderIdentityId")


class SenderIdentityOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    display_name: Optional[str] = Field(default=None, serialization_alias="displayName")
    status: str
    verified_at: Optional[str] = Field(default=None, serialization_alias="verifiedAt")
    last_used_at: Optional[str] = Field(default=None, serialization_alias="lastUsedAt")
    last_verification_sent_at: Optional[str] = Field(
        default=None, serialization_alias="lastVerificationSentAt"
    )


def to_identity_out(row: Mapping) -> dict:
    return SenderIdentityOut(
        id=str(row["id"]),
        email=row["email"],
        display_name=row.get("display_name"),
        status=row["status"],
        verified_at=row.get("verified_at"),
        last_used_at=row.get("last_used_at"),
        last_verification_sent_at=row.get("last_verification_sent_at"),
    ).model_dump(by_alias=True)


__all__ = [
    "DefaultSenderIdentityRequest",
    "SenderIdentityCreateRequest",
    "SenderIdentityOut",
    "TestEmailRequest",
    "to_identity_out",
]
