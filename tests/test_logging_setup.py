"""
Тесты для настройки логирования.
"""
import logging
from unittest.mock import patch

from config.settings import settings
from src.utils.logging_setup import setup_logging


def test_debug_overrides_log_level():
    with patch.object(settings, "DEBUG", True), \
            patch("src.utils.logging_setup.logging.FileHandler"), \
            patch("src.utils.logging_setup.logging.basicConfig") as basic_config:
        setup_logging()

    assert basic_config.call_args.kwargs["level"] == logging.DEBUG


def test_log_level_from_settings():
    with patch.object(settings, "DEBUG", False), \
            patch.object(settings, "LOG_LEVEL", "warning"), \
            patch("src.utils.logging_setup.logging.FileHandler"), \
            patch("src.utils.logging_setup.logging.basicConfig") as basic_config:
        setup_logging()

    assert basic_config.call_args.kwargs["level"] == logging.WARNING
