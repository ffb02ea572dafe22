# -*- coding: utf-8 -*-
import pytest

from app.shared.config import settings
from app.shared.config.config_loader import get_settings


def _reset_loader_cache():
    get_settings.cache_clear()


def test_loader_returns_dev_by_default(monkeypatch):
    monkeypatch.delenv("PYTHON_ENV", raising=False)
    _reset_loader_cache()
    s = get_settings()
    assert s.is_dev is True
    assert s.python_env == "development"


def test_loader_selects_test(monkeypatch):
    monkeypatch.setenv("PYTHON_ENV", "test")
    _reset_loader_cache()
    s = get_settings()
    assert s.is_test is True
    assert s.email_from == "noreply@invoicedesk.test"


def test_loader_selects_prod(monkeypatch):
    monkeypatch.setenv("PYTHON_ENV", "production")
    monkeypatch.setenv("DB_SSLMODE", "require")
    monkeypatch.setenv("JWT_SECRET_KEY", "X" * 40)
    _reset_loader_cache()
    s = get_settings()
    assert s.is_prod is True
    assert s.log_format == "json"


def test_prod_rejects_weak_jwt_secret(monkeypatch):
    monkeypatch.setenv("PYTHON_ENV", "production")
    monkeypatch.setenv("JWT_SECRET_KEY", "short")
    _reset_loader_cache()
    with pytest.raises(ValueError, match="JWT_SECRET_KEY"):
        get_settings()


def test_loader_caches_singleton():
    _reset_loader_cache()
    assert get_settings() is get_settings()


def test_proxy_follows_cache_clear(monkeypatch):
    monkeypatch.setenv("EMAIL_RATE_LIMIT", "3")
    _reset_loader_cache()
    assert settings.email_rate_limit == 3

    monkeypatch.setenv("EMAIL_RATE_LIMIT", "7")
    _reset_loader_cache()
    assert settings.email_rate_limit == 7


class TestRateLimitSettings:
    """Defaults y parsing de las llaves de rate limit / payload guard."""

    def test_defaults(self):
        s = get_settings()
        assert s.email_rate_limit == 10
        assert s.email_rate_window_ms == 600_000
        assert s.email_rate_key_scope == "ip+user"
        assert s.email_max_body_bytes == 5 * 1024 * 1024
        assert s.redis_retry_cooldown_sec == 30.0
        assert s.rate_limit_window_ms == 3_600_000

    @pytest.mark.parametrize(
        "scope, expected",
        [("ip", ("ip",)), ("user", ("user",)), ("ip+user", ("ip", "user"))],
    )
    def test_rate_key_scopes(self, monkeypatch, scope, expected):
        monkeypatch.setenv("EMAIL_RATE_KEY_SCOPE", scope)
        get_settings.cache_clear()
        assert get_settings().rate_key_scopes() == expected

    def test_invalid_scope_rejected(self, monkeypatch):
        monkeypatch.setenv("EMAIL_RATE_KEY_SCOPE", "session")
        get_settings.cache_clear()
        with pytest.raises(ValueError):
            get_settings()

    def test_blank_redis_url_is_none(self, monkeypatch):
        monkeypatch.setenv("REDIS_URL", "  ")
        get_settings.cache_clear()
        assert get_settings().redis_url is None


class TestEmailModeChecks:
    def test_smtp_mode_requires_credentials(self, monkeypatch):
        monkeypatch.setenv("EMAIL_MODE", "smtp")
        get_settings.cache_clear()
        with pytest.raises(ValueError, match="EMAIL_SERVER"):
            get_settings()

    def test_api_mode_requires_key_and_from(self, monkeypatch):
        monkeypatch.setenv("EMAIL_MODE", "api")
        monkeypatch.setenv("MAILERSEND_API_KEY", "mlsn.test")
        get_settings.cache_clear()
        with pytest.raises(ValueError, match="MAILERSEND_API_KEY"):
            get_settings()
# Fin del archivo backend/tests/shared/config/test_config_loader.py
