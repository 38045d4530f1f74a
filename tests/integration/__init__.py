"""
Integration tests for fieldguard.

Exercise the validation middleware through full HTTP requests against the
demo application.
"""
