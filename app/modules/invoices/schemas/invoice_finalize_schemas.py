# -*- coding: utf-8 -*-
"""
backend/app/modules/invoices/schemas/invoice_finalize_schemas.py

Body opcional y respuesta de POST /api/invoices/{invoice_id}/finalize.

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class InvoiceFinalizeRequest(BaseModel):
    """Con `to` la factura se envía antes de bloquearse."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    to: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None
    sender_identity_id: Optional[str] = Field(default=None, alias="senderIdentityId")

    @property
    def wants_send(self) -> bool:
        return bool((self.to or "").strip())


class FinalizedInvoiceOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    status: str
    is_locked: bool = Field(serialization_alias="isLocked")
    finalized_at: Optional[str] = Field(default=None, serialization_alias="finalizedAt")


def to_finalized_out(row: Mapping[str, Any]) -> dict:
    return FinalizedInvoiceOut(
        id=str(row["id"]),
        status=str(row.get("status") or ""),
        is_locked=bool(row.get("is_locked")),
        finalized_at=row.get("finalized_at"),
    ).model_dump(by_alias=True)


__all__ = ["InvoiceFinalizeRequest", "FinalizedInvoiceOut", "to_finalized_out"]
# Fin del archivo backend/app/modules/invoices/schemas/invoice_finalize_schemas.py
