# -*- coding: utf-8 -*-
"""
backend/app/shared/database/model_registry.py

Importa los módulos de modelos para que sus tablas queden registradas
en Base.metadata. Idempotente; se llama al construir un gateway.

Autor: InvoiceDesk
Fecha: 2025-12-22
"""

import importlib
import logging

logger = logging.getLogger(__name__)

MODEL_MODULES = (
    "app.modules.invoices.models",
    "app.modules.documents.models",
    "app.modules.sender_identities.models",
    "app.modules.audit.models",
)

_loaded = False


def load_models() -> None:
    global _loaded
    if _loaded:
        return
    for module_name in MODEL_MODULES:
        importlib.import_module(module_name)
    _loaded = True
    logger.debug("[ORM] Modelos registrados: %s", ", ".join(MODEL_MODULES))


__all__ = ["load_models", "MODEL_MODULES"]
# Fin del archivo backend/app/shared/database/model_registry.py
