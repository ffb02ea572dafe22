# -*- coding: utf-8 -*-
"""
backend/app/main.py

Punto de entrada del backend de InvoiceDesk.

- .env cargado antes de leer settings (python-dotenv)
- Logging según LOG_LEVEL / LOG_FORMAT
- Middlewares (de fuera hacia dentro): CORS → PayloadGuard →
  JSONException → RequestLogging
- Handlers de excepción que devuelven siempre el envelope
  {"ok": false, "error": {...}}
- Lifespan: cierra el cliente de Redis en shutdown

Autor: InvoiceDesk
Fecha: 2025-12-23
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv

# .env ANTES de cualquier import que lea settings.
# En producción no se pisan las variables del entorno.
_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_override_env = os.getenv("PYTHON_ENV", "development").strip().lower() != "production"
load_dotenv(dotenv_path=_ENV_PATH, override=_override_env)

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.logging import setup_logging_from_settings
from app.core.settings import get_settings
from app.shared.middleware import (
    JSONExceptionMiddleware,
    PayloadGuardMiddleware,
    RequestLoggingMiddleware,
)
from app.shared.redis.client import close_async_redis_client
from app.shared.utils.api_errors import ApiError, code_for_status
from app.shared.utils.json_response import UTF8JSONResponse, error_response

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        "🟢 %s %s iniciado (env=%s, email_mode=%s, redis=%s)",
        settings.app_name,
        settings.app_version,
        settings.python_env,
        settings.email_mode,
        "on" if settings.redis_url else "off",
    )
    try:
        yield
    finally:
        await close_async_redis_client()
        logger.info("🔴 Backend de InvoiceDesk apagado.")


openapi_tags = [
    {"name": "email", "description": "Envío de facturas y ofertas por email"},
    {"name": "invoices", "description": "Finalización y bloqueo de facturas"},
    {"name": "documents", "description": "Descarga de PDF"},
    {"name": "sender-identities", "description": "Identidades de remitente verificadas"},
    {"name": "health", "description": "Liveness / readiness"},
]


def _configure_cors(app_instance: FastAPI, settings) -> dict:
    """
    CORS_ORIGINS="*" habilita cualquier origen sin credenciales
    (el navegador rechaza "*" con credenciales).
    """
    origins = settings.get_cors_origins()
    wildcard = origins == ["*"]
    cors_config = {
        "allow_origins": origins,
        "allow_credentials": not wildcard,
        "allow_methods": ["*"] if wildcard else ["GET", "POST", "DELETE", "OPTIONS"],
        "allow_headers": ["*"],
        "expose_headers": ["Retry-After", "X-Request-ID", "Content-Disposition"],
        "max_age": 600,
    }
    if settings.is_prod and wildcard:
        logger.warning("⚠️ CORS wildcard en producción: define CORS_ORIGINS explícito")
    app_instance.add_middleware(CORSMiddleware, **cors_config)
    return cors_config


def _register_exception_handlers(app_instance: FastAPI) -> None:
    @app_instance.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return UTF8JSONResponse(
            content=exc.to_content(),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app_instance.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed."
        return error_response(
            exc.status_code,
            code_for_status(exc.status_code),
            message,
            headers=getattr(exc, "headers", None),
        )

    @app_instance.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        fields = [".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()]
        return error_response(422, "VALIDATION", "Invalid request.", fields=fields or None)


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging_from_settings(settings)

    app_instance = FastAPI(
        title=f"{settings.app_name} API",
        description="Backend de facturación: envío de documentos, bloqueo de facturas y PDFs",
        version=settings.app_version,
        lifespan=lifespan,
        openapi_tags=openapi_tags,
        default_response_class=UTF8JSONResponse,
    )

    # Starlette ejecuta los middlewares en orden inverso al registro
    app_instance.add_middleware(RequestLoggingMiddleware)
    app_instance.add_middleware(JSONExceptionMiddleware)
    app_instance.add_middleware(PayloadGuardMiddleware, max_bytes=settings.email_max_body_bytes)
    _configure_cors(app_instance, settings)

    _register_exception_handlers(app_instance)

    from app.routes import router as main_router

    app_instance.include_router(main_router)
    return app_instance


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("app.main:app", host=_settings.app_host, port=_settings.app_port)

# Fin del archivo backend/app/main.py
