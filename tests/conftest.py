"""Root conftest — shared test configuration."""

import os

import pytest

# Settings() requires DATABASE_URL; tests never reach a real server
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """get_settings() is lru_cached; each test sees the environment it sets."""
    from users_api.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
