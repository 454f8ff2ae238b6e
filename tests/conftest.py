"""
Pytest configuration and fixtures for the clinic API tests.

Every test gets its own empty store. Store-level tests run once per backend:
the in-memory store and the SQLAlchemy store on a private in-memory SQLite
database.
"""

import pytest
from fastapi.testclient import TestClient

from vetclinic.core.config import Settings
from vetclinic.main import create_app
from vetclinic.storage.memory import MemStorage
from vetclinic.storage.sql import SqlStorage


@pytest.fixture(params=["memory", "sql"])
def storage(request):
    """Empty store, parametrized over both backends."""
    if request.param == "sql":
        return SqlStorage.from_url("sqlite://")
    return MemStorage()


@pytest.fixture
def mem_storage() -> MemStorage:
    return MemStorage()


@pytest.fixture
def app_settings() -> Settings:
    return Settings(storage_backend="memory", seed_demo_data=False, log_level="WARNING")


@pytest.fixture
def app(mem_storage, app_settings):
    return create_app(storage=mem_storage, settings=app_settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
