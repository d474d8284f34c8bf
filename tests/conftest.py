"""
Shared fixtures.

Every test gets its own in-memory store and a fresh application so nothing
leaks between tests. Sample data is off; default settings and widget
configuration are still seeded.
"""

import pytest
from fastapi.testclient import TestClient

from Data.store import MemoryStore
from presentation import create_app
from services.config import Settings


def make_settings(**overrides) -> Settings:
    """Settings isolated from the host environment and any .env file."""
    values = {
        "STORE_BACKEND": "memory",
        "SEED_SAMPLE_DATA": False,
        "DEFAULT_USER_ID": "default-user",
        "OPENWEATHER_API_KEY": "",
        "WEATHER_API_KEY": "",
        "BRAINSTORM_BACKEND": "canned",
        "SEARCH_BACKEND": "stub",
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def client_for(store):
    """
    Build a client with overridden settings. It shares the test's store
    unless shared_store is False, in which case the app builds its own.
    """
    def _client(shared_store: bool = True, **overrides) -> TestClient:
        return TestClient(create_app(settings=make_settings(**overrides),
                                     store=store if shared_store else None))
    return _client
