"""Global pytest configuration."""

import pytest

from backend.app.adapters.fixtures import get_default_catalog
from backend.app.config import get_settings


@pytest.fixture(autouse=True)
def _clear_cached_config() -> None:
    """Drop cached settings and catalog so env overrides apply per test."""
    get_settings.cache_clear()
    get_default_catalog.cache_clear()
