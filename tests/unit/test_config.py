"""
Unit tests for settings and logging setup.
"""

import logging

import pytest
from pydantic import ValidationError

from pentascore.config import Settings
from pentascore.logging_config import CONSOLE_FORMAT, VERBOSE_FORMAT, setup_logging


class TestSettings:
    """Tests for Settings defaults and validation."""

    def test_defaults(self, settings):
        assert settings.handicap_pack_start_threshold_seconds == 90
        assert settings.handicap_pack_start_time_seconds == 90
        assert settings.handicap_pack_gate == "A"
        assert settings.log_level == "INFO"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PENTASCORE_HANDICAP_PACK_GATE", "C")
        monkeypatch.setenv("PENTASCORE_LOG_LEVEL", "debug")
        settings = Settings(_env_file=None)
        assert settings.handicap_pack_gate == "C"
        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_invalid_log_format(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_format="json")

    def test_negative_delay(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, handicap_pack_start_threshold_seconds=-1)

    def test_pack_time_before_threshold(self):
        with pytest.raises(ValidationError):
            Settings(
                _env_file=None,
                handicap_pack_start_threshold_seconds=120,
                handicap_pack_start_time_seconds=90,
            )


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        root.handlers = handlers
        root.setLevel(level)

    def test_console_format(self, settings):
        setup_logging(settings=settings)
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].formatter._fmt == CONSOLE_FORMAT

    def test_debug_uses_verbose(self, settings):
        setup_logging(level="debug", settings=settings)
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert root.handlers[0].formatter._fmt == VERBOSE_FORMAT

    def test_reconfigure_does_not_duplicate(self, settings):
        setup_logging(settings=settings)
        setup_logging(log_format="verbose", settings=settings)
        assert len(logging.getLogger().handlers) == 1

    def test_unknown_level(self, settings):
        with pytest.raises(ValueError):
            setup_logging(level="LOUD", settings=settings)

