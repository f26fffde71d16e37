"""
Pytest configuration for unit tests.

Keeps the developer's COUNTRIES_* settings out of the unit tests.
"""

import os

import pytest


@pytest.fixture(autouse=True)
def _clean_countries_env(monkeypatch):
    """Remove COUNTRIES_* environment variables for each test."""
    for name in list(os.environ):
        if name.startswith("COUNTRIES_"):
            monkeypatch.delenv(name)
