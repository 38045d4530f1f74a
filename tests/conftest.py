"""
Shared pytest configuration and fixtures for fieldguard tests.

This module provides common test fixtures and test doubles used across
the unit and integration test modules.
"""

from typing import Dict, Generator, List, Mapping, Optional

import pytest
from fastapi.testclient import TestClient

from fieldguard.config import Settings
from fieldguard.core.validation import ValidationError, ValidatorRegistry
from fieldguard.main import create_app


class FakeFieldAccessor:
    """
    In-memory RequestFieldAccessor that records how it is used.

    query_calls counts invocations of the query decoder so tests can check
    that the query string is decoded at most once per request.
    """

    def __init__(
        self,
        path: Optional[Dict[str, str]] = None,
        query: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
        cookies: Optional[Dict[str, str]] = None,
        query_error: Optional[Exception] = None,
    ):
        self.path = path or {}
        self.query = query or {}
        self.headers = headers or {}
        self.cookies = cookies or {}
        self.query_error = query_error
        self.query_calls = 0

    def path_param(self, name: str) -> Optional[str]:
        return self.path.get(name)

    def query_params(self) -> Mapping[str, str]:
        self.query_calls += 1
        if self.query_error is not None:
            raise self.query_error
        return self.query

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name)

    def cookie(self, name: str) -> Optional[str]:
        return self.cookies.get(name)


def recording_validator(calls: List[str], label: str, fail_with: Optional[ValidationError] = None):
    """Build a validator that appends label to calls and optionally fails."""

    def validate(value: str) -> None:
        calls.append(label)
        if fail_with is not None:
            raise fail_with

    validate.__name__ = label
    return validate


@pytest.fixture
def fake_accessor():
    """Factory for FakeFieldAccessor instances."""
    return FakeFieldAccessor


@pytest.fixture
def test_settings() -> Settings:
    """Provide test-specific settings configuration."""
    return Settings(
        _env_file=None,
        debug=True,
        log_level="DEBUG",
        sentry_enabled=False,
    )


@pytest.fixture
def registry() -> ValidatorRegistry:
    """Provide an empty validator registry."""
    return ValidatorRegistry()


@pytest.fixture
def app(test_settings):
    """Create FastAPI application instance with the default registry."""
    return create_app(test_settings)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Create synchronous test client for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_validator():
    """Factory for recording validators; see recording_validator."""
    return recording_validator
