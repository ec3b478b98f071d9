"""Shared fixtures for the msgcatalog test suite."""

import pytest

from msgcatalog.i18n import InMemoryLocaleCache


@pytest.fixture
def locale_cache():
    """Empty in-memory per-user locale cache."""
    return InMemoryLocaleCache()
