"""
Pytest configuration and fixtures.
"""

import os

# Settings are read on import; point them at SQLite before the app loads
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from event_tracker.db.database import Base, get_db
from event_tracker.main import app

# Import models to register with Base.metadata
from event_tracker.models import events  # noqa: F401


@pytest.fixture(scope="function")
def test_engine():
    """In-memory SQLite engine; one shared connection so every session sees the same tables."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db(test_engine):
    """Create a test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()

    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def override_get_db(test_db):
    """Override get_db dependency for FastAPI."""

    def _get_db():
        try:
            yield test_db
        finally:
            pass  # Don't close, we'll handle it in fixture

    return _get_db


@pytest.fixture
def client(override_get_db):
    """TestClient wired to the test database."""
    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sample_event():
    """A valid ingest body."""
    return {
        "timestamp": "2025-09-05T10:00:00Z",
        "source": "Shell",
        "event_type": "CommandExecuted",
        "data": {"command": "ls -l", "exit_code": 0},
    }
