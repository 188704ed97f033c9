from unittest.mock import MagicMock

import pytest

from geopeaks.core.locations import GeoSetRegistry
from geopeaks.core.store import GeoStore, reset_store_cache


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep host environment settings and cached connections out of tests."""
    for var in (
        "GEOPEAKS_REDIS_HOST",
        "GEOPEAKS_REDIS_PORT",
        "GEOPEAKS_REDIS_DB",
        "GEOPEAKS_RADIUS",
        "GEOPEAKS_UNIT",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_store_cache()
    GeoSetRegistry.reset()
    yield
    reset_store_cache()
    GeoSetRegistry.reset()


@pytest.fixture
def redis_client():
    """A mocked redis.Redis client; configure return values per test."""
    return MagicMock()


@pytest.fixture
def store(redis_client):
    return GeoStore(redis_client, address="localhost:6379/1")
