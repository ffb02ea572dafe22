# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/routes/pdf_routes.py

PDF de facturas y ofertas.

- POST /api/pdf: descarga directa
- POST /api/pdf/link: link de un solo uso (token, PDF_DOWNLOAD_TOKEN_TTL_MS)
- GET  /api/pdf/download?token=: consume el token y devuelve el PDF

Mismo camino que el adjunto del email (create_pdf_attachment), así que
los bytes descargados y los adjuntados coinciden.

Límites de POST: 60 por usuario y 120 por IP en RATE_LIMIT_WINDOW_MS.

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from pydantic import ValidationError

from app.shared.config import settings
from app.shared.database.table_gateway import SingleRowReader, StorageError
from app.shared.http_utils.request_meta import get_client_ip
from app.shared.security import check_rate_limit
from app.shared.utils.api_errors import ApiError, api_error_from_domain, bad_request
from app.modules.auth.dependencies import get_current_user_id
from app.modules.documents.enums import normalize_document_type
from app.modules.documents.routes.deps import get_document_reader
from app.modules.documents.schemas import PdfRequest
from app.modules.documents.services import (
    DocumentError,
    PdfAttachment,
    PdfDownloadTokenService,
    create_pdf_attachment,
    enforce_legacy_payload_match,
    get_pdf_download_tokens,
    load_document_payload_from_db,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])

PDF_USER_LIMIT = 60
PDF_IP_LIMIT = 120


async def enforce_pdf_limits(request: Request, user_id: str) -> None:
    window_ms = settings.rate_limit_window_ms
    await check_rate_limit("pdf", "user", user_id, PDF_USER_LIMIT, window_ms)
    await check_rate_limit("pdf", "ip", get_client_ip(request), PDF_IP_LIMIT, window_ms)


async def read_pdf_request(request: Request) -> tuple[dict, PdfRequest]:
    try:
        body = await request.json()
    except ValueError as e:
        raise bad_request("invalid_json", "Invalid JSON body.") from e
    if not isinstance(body, dict):
        raise bad_request("invalid_json", "Invalid JSON body.")
    try:
        return body, PdfRequest.model_validate(body)
    except ValidationError as e:
        raise bad_request(message="Invalid request body.") from e


async def render_document_pdf(
    reader: SingleRowReader,
    doc_type: Optional[str],
    doc_id: Optional[str],
    user_id: str,
    body: Optional[dict] = None,
) -> PdfAttachment:
    try:
        payload = await load_document_payload_from_db(reader, doc_type, doc_id, user_id)
        if body is not None:
            enforce_legacy_payload_match(body, payload)
        return create_pdf_attachment(doc_type, payload)
    except DocumentError as e:
        raise api_error_from_domain(e) from e
    except StorageError as e:
        raise ApiError(500, "STORAGE_ERROR", e.message) from e


def pdf_response(pdf: PdfAttachment) -> Response:
    return Response(
        content=pdf.buffer,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{pdf.filename}"'},
    )


@router.post("/pdf", summary="Descargar el PDF de un documento")
async def download_pdf(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    reader: SingleRowReader = Depends(get_document_reader),
):
    await enforce_pdf_limits(request, user_id)
    body, req = await read_pdf_request(request)
    pdf = await render_document_pdf(reader, req.resolved_type, req.resolved_doc_id, user_id, body)
    return pdf_response(pdf)


@router.post("/pdf/link", summary="Crear un link de descarga de un solo uso")
async def create_pdf_link(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    tokens: PdfDownloadTokenService = Depends(get_pdf_download_tokens),
):
    await enforce_pdf_limits(request, user_id)
    _, req = await read_pdf_request(request)
    doc_id = req.resolved_doc_id
    doc_type = normalize_document_type(req.resolved_type)
    if not doc_id or doc_type is None:
        raise bad_request(message="Missing required fields: docId, type")

    token = await tokens.issue(user_id, doc_type.value, doc_id)
    base_url = settings.app_base_url.rstrip("/")
    logger.info("[PdfLink] link emitido user=%s type=%s doc=%s", user_id, doc_type.value, doc_id)
    return {
        "ok": True,
        "url": f"{base_url}/api/pdf/download?token={token}",
        "expiresInSeconds": tokens.ttl_ms // 1000,
    }


@router.get("/pdf/download", summary="Descargar un PDF con un token de un solo uso")
async def download_pdf_with_token(
    token: str = Query(default=""),
    tokens: PdfDownloadTokenService = Depends(get_pdf_download_tokens),
    reader: SingleRowReader = Depends(get_document_reader),
):
    if not token:
        raise bad_request(message="Missing token.")
    grant = await tokens.consume(token)
    if grant is None:
        raise ApiError(401, "invalid_token", "Invalid or expired token.")

    pdf = await render_document_pdf(reader, grant.doc_type, grant.doc_id, grant.user_id)
    return pdf_response(pdf)


__all__ = ["router", "PDF_USER_LIMIT", "PDF_IP_LIMIT", "enforce_pdf_limits"]
# Fin del archivo backend/app/modules/documents/routes/pdf_routes.py
