# -*- coding: utf-8 -*-
"""
backend/tests/shared/utils/test_validators.py

Autor: InvoiceDesk
Creado: 2025-12-26
"""

from uuid import UUID

import pytest

from app.shared.utils.validators import validate_uuid


@pytest.mark.parametrize(
    "value, expected",
    [
        ("3f2c6a1e-8d4b-4c2a-9e51-0b7f4d2a9c10", True),
        (" 3F2C6A1E-8D4B-4C2A-9E51-0B7F4D2A9C10 ", True),
        (UUID("3f2c6a1e-8d4b-4c2a-9e51-0b7f4d2a9c10"), True),
        ("abc", False),
        ("2025-001", False),
        ("1; drop table invoices", False),
        ("", False),
        (None, False),
        (42, False),
    ],
)
def test_validate_uuid(value, expected):
    assert validate_uuid(value) is expected

# Fin del archivo backend/tests/shared/utils/test_validators.py
