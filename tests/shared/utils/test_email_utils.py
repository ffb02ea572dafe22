# -*- coding: utf-8 -*-
"""
backend/tests/shared/utils/test_email_utils.py

Autor: InvoiceDesk
Creado: 2025-12-24
"""

import pytest

from app.shared.utils.email_utils import is_valid_email_address, normalize_email, normalize_valid_email


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  Erika@Kunde.DE ", "erika@kunde.de"),
        ("max@muster.de", "max@muster.de"),
        ("kein-email", None),
        ("a@b", None),
        ("a b@c.de", None),
        ("", None),
        (None, None),
    ],
)
def test_normalize_valid_email(raw, expected):
    assert normalize_valid_email(raw) == expected


def test_normalize_email_does_not_validate():
    assert normalize_email(" NOT-AN-EMAIL ") == "not-an-email"


def test_rfc_syntax_checked_beyond_basic_shape():
    # pasa la forma local@dominio.tld pero no la sintaxis RFC
    assert is_valid_email_address("max..muster@muster.de") is False

# Fin del archivo backend/tests/shared/utils/test_email_utils.py
