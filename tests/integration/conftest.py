"""
Integration test configuration
"""
import pytest
from fastapi.testclient import TestClient

from photo_people.api.deps import get_current_user, get_person_service
from photo_people.app.main import app


@pytest.fixture
def client(auth_user, service):
    """FastAPI test client with dependency overrides."""
    app.dependency_overrides[get_current_user] = lambda: auth_user
    app.dependency_overrides[get_person_service] = lambda: service

    test_client = TestClient(app)
    yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(service):
    """Client without an authenticated user."""
    app.dependency_overrides[get_person_service] = lambda: service

    test_client = TestClient(app)
    yield test_client

    app.dependency_overrides.clear()
