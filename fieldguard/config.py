"""
Configuration Management for fieldguard

This module provides centralized settings loaded from environment variables,
plus the logging and Sentry configuration derived from them.
"""

import logging
import logging.config
from typing import Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Every field can be overridden by the upper-cased environment variable of
    the same name (e.g. LOG_LEVEL, STRICT_QUERY_PARSING).
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Application Settings
    app_name: str = Field(default="fieldguard")
    app_version: str = Field(default="0.1.0")
    debug: bool = Field(default=False)

    # Server Settings
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080)

    # Logging Settings
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file: Optional[str] = Field(default=None)

    # Validation Settings
    strict_query_parsing: bool = Field(default=False)

    # Sentry Error Tracking Settings
    sentry_enabled: bool = Field(default=False)
    sentry_dsn: str = Field(default="")
    sentry_environment: str = Field(default="development")
    sentry_traces_sample_rate: float = Field(default=0.1, ge=0.0, le=1.0)
    sentry_release: Optional[str] = Field(default=None)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    def get_logging_config(self) -> Dict[str, Any]:
        """
        Get logging configuration dictionary.

        Everything logs through the root logger; the fieldguard logger only
        pins its own level so rejected fields show up at DEBUG.
        """
        handlers: Dict[str, Dict[str, Any]] = {
            "console": {"class": "logging.StreamHandler", "formatter": "default"},
        }
        if self.log_file:
            handlers["file"] = {
                "class": "logging.FileHandler",
                "filename": self.log_file,
                "formatter": "default",
            }

        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": self.log_format}},
            "handlers": handlers,
            "root": {"handlers": list(handlers), "level": self.log_level},
            "loggers": {"fieldguard": {"level": self.log_level}},
        }

    def get_sentry_config(self) -> Dict[str, Any]:
        """Get Sentry error tracking configuration."""
        return {
            "enabled": self.sentry_enabled,
            "dsn": self.sentry_dsn,
            "environment": self.sentry_environment,
            "traces_sample_rate": self.sentry_traces_sample_rate,
            "release": self.sentry_release,
        }


settings = Settings()


def configure_logging() -> None:
    """Configure application logging using the settings."""
    logging.config.dictConfig(settings.get_logging_config())
    logging.getLogger(__name__).info(
        f"Logging configured - Level: {settings.log_level}, File: {settings.log_file or 'console only'}"
    )


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment variables."""
    global settings
    settings = Settings()
    return settings
