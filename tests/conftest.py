"""
Shared test configuration
"""
import os

# Keep the application off Postgres/Redis during tests
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite:///:memory:")

from uuid import uuid4

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from photo_people.db.base import Base
from photo_people.repositories.memory import InMemoryPersonRepository
from photo_people.schemas.auth import AuthUser
from photo_people.services.jobs import InMemoryJobDispatcher
from photo_people.services.person_service import PersonService
from photo_people.services.storage.memory import InMemoryStorageRepository


@pytest.fixture
def auth_user():
    """Authenticated owner."""
    return AuthUser(id=uuid4(), email="owner@example.com")


@pytest.fixture
def other_user():
    """A second account."""
    return AuthUser(id=uuid4(), email="other@example.com")


@pytest.fixture
def repo():
    return InMemoryPersonRepository()


@pytest.fixture
def storage():
    return InMemoryStorageRepository()


@pytest.fixture
def jobs():
    return InMemoryJobDispatcher()


@pytest.fixture
def service(repo, storage, jobs):
    return PersonService(repo, storage, jobs, minimum_face_count=1, thumbnail_prefix="thumbs")


@pytest.fixture
def db_session():
    """Create test database session."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()
    engine.dispose()
