"""
Unit tests for configuration module.

Tests the settings defaults, environment variable handling and the derived
logging and Sentry configuration.
"""

import logging.config
import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from fieldguard.config import Settings, get_settings, reload_settings
from fieldguard.main import configure_sentry


class TestSettings:
    """Test suite for Settings configuration class."""

    def test_default_values(self):
        """Test that default configuration values are set correctly."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

            assert settings.app_name == "fieldguard"
            assert settings.debug is False
            assert settings.host == "127.0.0.1"
            assert settings.port == 8080
            assert settings.log_level == "INFO"
            assert settings.log_file is None
            assert settings.strict_query_parsing is False
            assert settings.sentry_enabled is False

    def test_environment_variable_override(self):
        """Test that environment variables override default values."""
        env_vars = {
            "APP_NAME": "validated-service",
            "DEBUG": "true",
            "PORT": "9000",
            "LOG_LEVEL": "debug",
            "STRICT_QUERY_PARSING": "true",
        }

        with patch.dict(os.environ, env_vars, clear=True):
            settings = Settings(_env_file=None)

            assert settings.app_name == "validated-service"
            assert settings.debug is True
            assert settings.port == 9000
            assert settings.log_level == "DEBUG"
            assert settings.strict_query_parsing is True

    def test_invalid_log_level(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "chatty"}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

    def test_invalid_sample_rate(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, sentry_traces_sample_rate=1.5)

    def test_logging_config_console_only(self):
        config = Settings(_env_file=None, log_level="WARNING").get_logging_config()

        assert set(config["handlers"]) == {"console"}
        assert config["root"] == {"handlers": ["console"], "level": "WARNING"}
        assert config["loggers"] == {"fieldguard": {"level": "WARNING"}}

    def test_logging_config_with_file(self, tmp_path):
        log_file = str(tmp_path / "fieldguard.log")
        config = Settings(_env_file=None, log_file=log_file).get_logging_config()

        assert config["handlers"]["file"]["filename"] == log_file
        assert config["root"]["handlers"] == ["console", "file"]

    def test_logging_config_is_accepted_by_dict_config(self):
        config = Settings(_env_file=None).get_logging_config()

        logging.config.dictConfig(config)

    def test_sentry_config(self):
        settings = Settings(_env_file=None, sentry_enabled=True, sentry_dsn="https://key@example.com/1")

        assert settings.get_sentry_config() == {
            "enabled": True,
            "dsn": "https://key@example.com/1",
            "environment": "development",
            "traces_sample_rate": 0.1,
            "release": None,
        }

    def test_reload_settings(self):
        with patch.dict(os.environ, {"APP_NAME": "reloaded"}):
            settings = reload_settings()

            assert settings.app_name == "reloaded"
            assert get_settings() is settings
        reload_settings()


class TestSentryConfiguration:

    @patch("fieldguard.main.sentry_sdk")
    def test_disabled_by_default(self, mock_sentry):
        assert configure_sentry(Settings(_env_file=None)) is False
        mock_sentry.init.assert_not_called()

    @patch("fieldguard.main.sentry_sdk")
    def test_enabled_without_dsn(self, mock_sentry):
        assert configure_sentry(Settings(_env_file=None, sentry_enabled=True)) is False
        mock_sentry.init.assert_not_called()

    @patch("fieldguard.main.sentry_sdk")
    def test_enabled_with_dsn(self, mock_sentry):
        settings = Settings(_env_file=None, sentry_enabled=True, sentry_dsn="https://key@example.com/1")

        assert configure_sentry(settings) is True
        kwargs = mock_sentry.init.call_args.kwargs
        assert kwargs["dsn"] == "https://key@example.com/1"
        assert kwargs["environment"] == "development"
        mock_sentry.set_tag.assert_any_call("service", "fieldguard")
