"""
Pytest configuration and fixtures for Pixlink API tests.
"""
import os

os.environ.setdefault("PIXLINK_DATABASE_URL", "sqlite:///:memory:")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pixlink.database import Base, get_db
from pixlink.limiter import limiter
from pixlink.main import app
from pixlink.models import Image, User

# Disable rate limiting for tests
limiter.enabled = False

# Use in-memory SQLite for tests with shared connection
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Global session for sharing across requests
_test_session = None


def get_test_db():
    """Get the shared test database session."""
    yield _test_session


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    global _test_session

    Base.metadata.create_all(bind=engine)
    _test_session = TestingSessionLocal()
    app.dependency_overrides[get_db] = get_test_db

    yield _test_session

    app.dependency_overrides.clear()
    _test_session.close()
    _test_session = None

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def test_user(db):
    """Create a test user."""
    user = User(username="testuser", email="test@example.com")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def other_user(db):
    user = User(username="otheruser", email="other@example.com")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def make_image(db):
    """Factory inserting an image row directly, bypassing the upload service."""
    counter = {"n": 0}

    def _make(user, **overrides):
        counter["n"] += 1
        fields = {
            "user_id": user.id,
            "title": "Original Title",
            "description": "Original description",
            "filename": "test.jpg",
            "file_path": "/uploads/test.jpg",
            "file_size": 1024,
            "mime_type": "image/jpeg",
            "short_url": f"test{counter['n']:04d}",
            "is_public": True,
            "updated_at": datetime.now(timezone.utc) - timedelta(hours=1),
        }
        fields.update(overrides)
        image = Image(**fields)
        db.add(image)
        db.commit()
        db.refresh(image)
        return image

    return _make
