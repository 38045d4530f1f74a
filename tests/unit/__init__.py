"""Unit tests for individual fieldguard components."""
