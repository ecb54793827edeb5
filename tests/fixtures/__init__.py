# tests/fixtures/__init__.py
"""Shared fixtures for ruletree tests."""
