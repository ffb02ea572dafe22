# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_base.py

Base de configuración (Pydantic v2) para InvoiceDesk.
- Esta clase NO instancia singletons ni resuelve .env; eso lo hace config_loader.
- Es la base para settings_dev.py, settings_testing.py y settings_prod.py.

Autor: InvoiceDesk
Fecha: 2025-12-20
"""

from typing import Literal, Optional
from pydantic import Field, SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Tipos de entorno soportados
EnvName = Literal["development", "test", "production"]

# Alcance de la llave de rate limit para envíos de email
RateKeyScope = Literal["ip", "user", "ip+user"]


class BaseAppSettings(BaseSettings):
    # =========================
    # Núcleo de la aplicación
    # =========================
    python_env: EnvName = Field(default="development", validation_alias="PYTHON_ENV")
    app_name: str = Field(default="InvoiceDesk", validation_alias="APP_NAME")
    app_version: str = Field(default="0.1.0", validation_alias="APP_VERSION")
    app_host: str = Field(default="0.0.0.0", validation_alias="APP_HOST")
    app_port: int = Field(default=4000, validation_alias="APP_PORT")
    app_base_url: str = Field(default="http://localhost:4000", validation_alias="APP_BASE_URL")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # =========================
    # Base de datos (PostgreSQL)
    # =========================
    db_user: str = Field(default="postgres", validation_alias="DB_USER")
    db_password: SecretStr = Field(default=SecretStr("postgres"), validation_alias="DB_PASSWORD")
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=5432, validation_alias="DB_PORT")
    db_name: str = Field(default="invoicedesk", validation_alias="DB_NAME")
    db_echo_sql: bool = Field(default=False, validation_alias="DB_ECHO_SQL")
    db_sslmode: Literal["disable", "prefer", "require"] = Field(default="prefer", validation_alias="DB_SSLMODE")
    db_command_timeout_s: float = Field(default=5.0, validation_alias="DB_COMMAND_TIMEOUT_S")
    db_url: Optional[str] = Field(default=None, validation_alias="DB_URL")

    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        """
        Genera la URL de conexión para SQLAlchemy + asyncpg.
        Prioriza DB_URL si existe; el modo SSL viaja en connect_args, no en la URL.
        """
        from urllib.parse import quote_plus

        if self.db_url:
            return (
                self.db_url.replace("postgres://", "postgresql+asyncpg://")
                .replace("postgresql://", "postgresql+asyncpg://")
            )

        pw = quote_plus(self.db_password.get_secret_value())
        return (
            f"postgresql+asyncpg://{self.db_user}:{pw}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    # =========================
    # Redis (contador compartido de rate limit)
    # =========================
    redis_url: Optional[str] = Field(default=None, validation_alias="REDIS_URL")
    redis_socket_timeout_ms: int = Field(default=500, ge=50, validation_alias="REDIS_SOCKET_TIMEOUT_MS")
    redis_retry_cooldown_sec: float = Field(default=30.0, ge=0, validation_alias="REDIS_RETRY_COOLDOWN_SEC")

    # =========================
    # Rate limiting / Payload guard
    # =========================
    rate_limit_enabled: bool = Field(default=True, validation_alias="RATE_LIMIT_ENABLED")
    email_rate_limit: int = Field(default=10, gt=0, validation_alias="EMAIL_RATE_LIMIT")
    email_rate_window_ms: int = Field(default=600_000, gt=0, validation_alias="EMAIL_RATE_WINDOW_MS")
    email_rate_key_scope: RateKeyScope = Field(default="ip+user", validation_alias="EMAIL_RATE_KEY_SCOPE")
    email_max_body_bytes: int = Field(default=5 * 1024 * 1024, gt=0, validation_alias="EMAIL_MAX_BODY_BYTES")
    # Ventana de los límites generales (PDF, identidades de remitente)
    rate_limit_window_ms: int = Field(default=3_600_000, gt=0, validation_alias="RATE_LIMIT_WINDOW_MS")
    # Vida de los links de descarga de PDF (mínimo efectivo 30s)
    pdf_download_token_ttl_ms: int = Field(default=180_000, gt=0, validation_alias="PDF_DOWNLOAD_TOKEN_TTL_MS")

    # =========================
    # CORS / Frontend
    # =========================
    allowed_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")
    frontend_url: str = Field(default="http://localhost:5173", validation_alias="FRONTEND_URL")

    # =========================
    # Auth / JWT
    # =========================
    jwt_secret_key: SecretStr = Field(default=SecretStr("please-change-me"), validation_alias="JWT_SECRET_KEY")
    jwt_algorithm: Literal["HS256", "HS384", "HS512"] = Field(default="HS256", validation_alias="JWT_ALGORITHM")
    jwt_audience: Optional[str] = Field(default=None, validation_alias="JWT_AUDIENCE")
    access_token_expire_minutes: int = Field(default=60, validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # =========================
    # Email
    # =========================
    email_mode: Literal["console", "smtp", "api"] = Field(default="console", validation_alias="EMAIL_MODE")
    email_provider: Literal["smtp", "mailersend", ""] = Field(default="", validation_alias="EMAIL_PROVIDER")
    email_timeout_sec: int = Field(default=30, validation_alias="EMAIL_TIMEOUT_SEC")
    email_from: Optional[str] = Field(default=None, validation_alias="EMAIL_FROM")
    sender_domain_name: str = Field(default="InvoiceDesk", validation_alias="SENDER_DOMAIN_NAME")

    # SMTP (solo aplica si email_mode == "smtp")
    smtp_server: Optional[str] = Field(default=None, validation_alias="EMAIL_SERVER")
    smtp_port: int = Field(default=465, validation_alias="EMAIL_PORT")
    smtp_username: Optional[str] = Field(default=None, validation_alias="EMAIL_USERNAME")
    smtp_password: Optional[SecretStr] = Field(default=None, validation_alias="EMAIL_PASSWORD")
    email_use_ssl: bool = Field(default=True, validation_alias="EMAIL_USE_SSL")
    email_use_tls: bool = Field(default=False, validation_alias="EMAIL_USE_TLS")
    email_tls_verify: bool = Field(default=True, validation_alias="EMAIL_TLS_VERIFY")

    # MailerSend API (solo aplica si email_mode == "api")
    mailersend_api_key: Optional[SecretStr] = Field(default=None, validation_alias="MAILERSEND_API_KEY")

    # =========================
    # Observabilidad / Logging
    # =========================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: Literal["json", "pretty", "plain"] = Field(default="plain", validation_alias="LOG_FORMAT")

    # ===== Helpers de entorno =====
    @computed_field  # type: ignore[misc]
    @property
    def is_dev(self) -> bool:
        return self.python_env == "development"

    @computed_field  # type: ignore[misc]
    @property
    def is_test(self) -> bool:
        return self.python_env == "test"

    @computed_field  # type: ignore[misc]
    @property
    def is_prod(self) -> bool:
        return self.python_env == "production"

    @computed_field  # type: ignore[misc]
    @property
    def jwt_secret(self) -> str:
        return self.jwt_secret_key.get_secret_value()

    @computed_field  # type: ignore[misc]
    @property
    def email_rate_window_sec(self) -> float:
        return self.email_rate_window_ms / 1000.0

    @field_validator("email_from", "redis_url", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def get_cors_origins(self) -> list[str]:
        """Convierte allowed_origins en lista procesable para CORS middleware."""
        if not self.allowed_origins or self.allowed_origins == "*":
            return ["*"]
        return [o.strip().strip('"').strip("'") for o in self.allowed_origins.split(",") if o.strip()]

    def rate_key_scopes(self) -> tuple[str, ...]:
        """Devuelve los alcances activos de la llave de rate limit ('ip', 'user')."""
        return tuple(part for part in self.email_rate_key_scope.split("+") if part)

    def _security_checks(self) -> None:
        """
        Validaciones mínimas de seguridad y coherencia.
        Se invoca desde config_loader tras instanciar el settings.
        """
        import logging
        logger = logging.getLogger(__name__)

        jwt_key = self.jwt_secret_key.get_secret_value()
        weak_jwt = not jwt_key or jwt_key == "please-change-me" or len(jwt_key) < 32

        if self.is_prod:
            if weak_jwt:
                raise ValueError("JWT_SECRET_KEY debe tener ≥32 caracteres en producción")
            if self.db_sslmode != "require":
                raise ValueError("DB_SSLMODE debe ser 'require' en producción")

        if self.is_dev and weak_jwt:
            logger.info("ℹ️ JWT_SECRET_KEY es débil o usa valor por defecto - considera usar una clave más segura en desarrollo")

        if self.is_dev and not self.redis_url:
            logger.info("ℹ️ REDIS_URL vacío - el rate limit usará contadores en memoria por proceso")

        # Validación mínima para email, según modo (evita deploys "a medias")
        if self.email_mode == "smtp":
            if not self.smtp_server or not self.smtp_username or not self.smtp_password:
                raise ValueError("EMAIL_MODE=smtp requiere EMAIL_SERVER, EMAIL_USERNAME y EMAIL_PASSWORD.")
        if self.email_mode == "api":
            if not self.mailersend_api_key or not self.email_from:
                raise ValueError("EMAIL_MODE=api requiere MAILERSEND_API_KEY y EMAIL_FROM.")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


__all__ = ["BaseAppSettings", "EnvName", "RateKeyScope"]
# Fin del archivo backend/app/shared/config/settings_base.py
