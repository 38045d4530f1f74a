"""Core validation engine for fieldguard."""
