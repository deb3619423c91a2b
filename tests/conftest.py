"""Pytest configuration and fixtures."""
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import Database
from app.main import create_app
from app.services.product_store import ProductStore


@pytest.fixture
def test_settings():
    """Settings pointing at an in-memory SQLite database."""
    return Settings(database_url="sqlite:///:memory:", log_file=None)


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def client(app):
    """Test client with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def product(client):
    """A product created through the API."""
    response = client.post("/api/products", json={"name": "Mouse - Testing", "price": 50})
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
def test_db():
    """A connected Database of its own, outside any application."""
    database = Database("sqlite:///:memory:")
    database.connect()
    yield database
    database.disconnect()


@pytest.fixture
def store(test_db):
    session = test_db.session()
    yield ProductStore(session)
    session.close()
