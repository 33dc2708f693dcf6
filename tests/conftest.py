import pytest
from fastapi.testclient import TestClient

from gym_api.config import Settings
from gym_api.main import create_app


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a fresh SQLite file for each test."""
    return Settings(database_url=f"sqlite:///{tmp_path / 'test.db'}")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
