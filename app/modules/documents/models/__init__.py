# -*- coding: utf-8 -*-
"""
backend/app/modules/documents/models/__init__.py

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

from .client_models import Client
from .offer_models import Offer
from .user_settings_models import UserSettings

__all__ = ["Client", "Offer", "UserSettings"]
