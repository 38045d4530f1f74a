"""
fieldguard Test Suite

Test Structure:
- unit/: Unit tests for the registry, dispatcher, validators, middleware and config
- integration/: Requests through the complete demo application
- conftest.py: Shared pytest configuration and fixtures
"""
