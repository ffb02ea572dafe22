# -*- coding: utf-8 -*-
import logging

from app.shared.config.logging_config import JSON_FORMATTER_PATH, build_logging_config, setup_logging


def test_setup_logging_plain():
    setup_logging(level="DEBUG", fmt="plain")
    logger = logging.getLogger("test_plain")
    logger.debug("hello plain")
    assert any(isinstance(h, logging.StreamHandler) for h in logging.getLogger().handlers)


def test_setup_logging_json():
    setup_logging(level="INFO", fmt="json")
    logging.getLogger("test_json").info("hello json")
    found = False
    for h in logging.getLogger().handlers:
        fmt = getattr(h, "formatter", None)
        if fmt is not None and fmt.__class__.__module__.startswith("pythonjsonlogger"):
            found = True
            break
    assert found, "Se esperaba JsonFormatter activo en modo json"


def test_noisy_loggers_quiet_unless_debug():
    cfg = build_logging_config("INFO", "plain")
    assert cfg["loggers"]["httpx"]["level"] == "WARNING"
    assert cfg["formatters"]["json"]["()"] == JSON_FORMATTER_PATH

    debug_cfg = build_logging_config("debug", "pretty")
    assert debug_cfg["loggers"]["sqlalchemy.engine"]["level"] == "DEBUG"
    assert debug_cfg["handlers"]["console"]["formatter"] == "pretty"
# Fin del archivo backend/tests/shared/config/test_logging_config.py
