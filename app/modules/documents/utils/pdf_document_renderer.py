# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/utils/pdf_document_renderer.py

Render PDF de facturas (RECHNUNG) y ofertas (ANGEBOT) con ReportLab.

El canvas usa invariant=1: sin fecha de creación ni ID aleatorio en el
archivo, así el mismo payload produce siempre los mismos bytes. El PDF
descargado y el adjunto del email salen de esta misma función.

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from __future__ import annotations

from io import BytesIO
from typing import Any, List

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from app.modules.documents.enums import DocumentType, normalize_document_type
from app.modules.documents.schemas import DocumentPayload
from app.modules.documents.utils.formatting import format_currency, format_date, to_decimal

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
MARGIN = 48
LINE = 13

_GREY = (0.42, 0.45, 0.5)
_RULE = (0.9, 0.91, 0.92)


class _Writer:
    """Cursor vertical sobre el canvas con salto de página automático."""

    def __init__(self, c: canvas.Canvas):
        self.c = c
        self.width, self.height = A4
        self.left = MARGIN
        self.right = self.width - MARGIN
        self.content_width = self.right - self.left
        self.y = self.height - MARGIN

    def ensure_space(self, needed: float) -> None:
        if self.y - needed < MARGIN:
            self.c.showPage()
            self.y = self.height - MARGIN

    def lines(self, text: str, width: float, font: str = FONT, size: int = 10) -> List[str]:
        out: List[str] = []
        for raw in str(text or "").splitlines() or [""]:
            out.extend(simpleSplit(raw, font, size, width) or [""])
        return out

    def paragraph(self, text: str, font: str = FONT, size: int = 10, width: float = None) -> None:
        width = width or self.content_width
        for line in self.lines(text, width, font, size):
            self.ensure_space(LINE)
            self.c.setFont(font, size)
            self.c.drawString(self.left, self.y, line)
            self.y -= LINE

    def right_text(self, text: str, font: str = FONT, size: int = 10) -> None:
        self.ensure_space(LINE)
        self.c.setFont(font, size)
        self.c.drawRightString(self.right, self.y, text)
        self.y -= LINE

    def section_title(self, text: str) -> None:
        self.y -= 6
        self.ensure_space(22)
        self.c.setFont(FONT_BOLD, 12)
        self.c.drawString(self.left, self.y, text)
        self.y -= 16

    def rule(self) -> None:
        self.c.setStrokeColorRGB(*_RULE)
        self.c.line(self.left, self.y + 4, self.right, self.y + 4)
        self.y -= 6


def _positions(doc: dict) -> List[dict]:
    positions = doc.get("positions")
    return [p for p in positions if isinstance(p, dict)] if isinstance(positions, list) else []


def compute_totals(doc: dict) -> tuple:
    """(netto, mwst, gesamt) como Decimal."""
    net = sum(
        (to_decimal(p.get("quantity")) * to_decimal(p.get("price")) for p in _positions(doc)),
        start=to_decimal(0),
    )
    vat = net * to_decimal(doc.get("vatRate")) / 100
    return net, vat, net + vat


def _draw_header(w: _Writer, is_invoice: bool, doc: dict, settings: dict) -> None:
    c = w.c
    top = w.y
    c.setFont(FONT_BOLD, 18)
    c.drawString(w.left, top, settings.get("companyName") or "")
    c.drawRightString(w.right, top, "RECHNUNG" if is_invoice else "ANGEBOT")

    c.setFont(FONT, 10)
    meta = [f"Nr: {doc.get('number') or ''}", f"Datum: {format_date(doc.get('date'))}"]
    if is_invoice and doc.get("dueDate"):
        meta.append(f"Fällig: {format_date(doc.get('dueDate'))}")
    if not is_invoice and doc.get("validUntil"):
        meta.append(f"Gültig bis: {format_date(doc.get('validUntil'))}")

    y = top - 26
    for line in meta:
        c.drawRightString(w.right, y, line)
        y -= 14

    address_lines = w.lines(settings.get("address") or "", w.content_width * 0.55)
    ya = top - 20
    for line in address_lines:
        c.drawString(w.left, ya, line)
        ya -= LINE

    w.y = min(y, ya) - 20


def _draw_positions(w: _Writer, doc: dict, currency: str) -> None:
    c = w.c
    col_qty = w.left + w.content_width * 0.72
    col_price = w.left + w.content_width * 0.86
    desc_width = w.content_width * 0.6 - 8

    w.ensure_space(30)
    c.setFont(FONT_BOLD, 10)
    c.drawString(w.left, w.y, "Beschreibung")
    c.drawRightString(col_qty - 8, w.y, "Menge")
    c.drawRightString(col_price - 8, w.y, "Einzelpreis")
    c.drawRightString(w.right, w.y, "Gesamt")
    w.y -= 10
    w.rule()

    positions = _positions(doc)
    if not positions:
        c.setFillColorRGB(*_GREY)
        w.paragraph("Keine Positionen")
        c.setFillColorRGB(0, 0, 0)
        return

    for p in positions:
        desc_lines = w.lines(str(p.get("description") or ""), desc_width)
        row_height = max(len(desc_lines), 1) * LINE + 4
        w.ensure_space(row_height)
        row_y = w.y
        c.setFont(FONT, 10)
        for i, line in enumerate(desc_lines):
            c.drawString(w.left, row_y - i * LINE, line)
        qty = f"{p.get('quantity', '')} {p.get('unit') or ''}".strip()
        row_total = to_decimal(p.get("quantity")) * to_decimal(p.get("price"))
        c.drawRightString(col_qty - 8, row_y, qty)
        c.drawRightString(col_price - 8, row_y, format_currency(p.get("price"), currency))
        c.drawRightString(w.right, row_y, format_currency(row_total, currency))
        w.y = row_y - row_height


def create_pdf_buffer_from_payload(doc_type: Any, payload: DocumentPayload) -> bytes:
    """Bytes del PDF; idénticos para el mismo (doc_type, payload)."""
    resolved = normalize_document_type(doc_type) or DocumentType.OFFER
    is_invoice = resolved == DocumentType.INVOICE
    doc = payload.doc or {}
    settings = payload.settings or {}
    client = payload.client or {}
    currency = settings.get("currency") or "EUR"
    label = "Rechnung" if is_invoice else "Angebot"

    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4, invariant=1)
    c.setTitle(f"{label} {doc.get('number') or ''}".strip())
    c.setAuthor(settings.get("companyName") or "")
    c.setCreator("InvoiceDesk")

    w = _Writer(c)
    _draw_header(w, is_invoice, doc, settings)

    w.section_title("Empfänger")
    recipient = "\n".join(
        x for x in (client.get("companyName"), client.get("contactPerson"), client.get("address")) if x
    )
    w.paragraph(recipient or " ", size=11)
    w.y -= 10

    w.section_title(f"{label} {doc.get('number') or ''}".strip())
    if doc.get("introText"):
        w.paragraph(doc["introText"])
        w.y -= 8

    _draw_positions(w, doc, currency)

    net, vat, total = compute_totals(doc)
    vat_rate = doc.get("vatRate") or 0
    w.y -= 8
    w.ensure_space(60)
    w.right_text("Summe", FONT_BOLD, 11)
    w.right_text(f"Netto: {format_currency(net, currency)}")
    w.right_text(f"MwSt ({vat_rate}%): {format_currency(vat, currency)}")
    w.right_text(f"Gesamt: {format_currency(total, currency)}", FONT_BOLD, 11)
    w.y -= 20

    if doc.get("footerText"):
        w.paragraph(doc["footerText"])
    if settings.get("footerText"):
        w.y -= 4
        w.paragraph(settings["footerText"])

    if is_invoice:
        w.y -= 10
        w.paragraph("Bankverbindung", FONT_BOLD)
        bank = [
            f"Bank: {settings['bankName']}" if settings.get("bankName") else None,
            f"IBAN: {settings['iban']}" if settings.get("iban") else None,
            f"BIC: {settings['bic']}" if settings.get("bic") else None,
            f"Steuer-Nr: {settings['taxId']}" if settings.get("taxId") else None,
        ]
        w.paragraph("\n".join(x for x in bank if x))
        w.y -= 4
        w.paragraph("Bitte geben Sie bei der Zahlung die Rechnungsnummer an.")

    c.showPage()
    c.save()
    return buffer.getvalue()


__all__ = ["create_pdf_buffer_from_payload", "compute_totals"]
# Fin del archivo backend/app/modules/documents/utils/pdf_document_renderer.py
