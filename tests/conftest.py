import os

# Settings are read when reset_api.database.database is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from datetime import datetime, timedelta, timezone
from sqlmodel import Session, SQLModel, create_engine
from sqlalchemy.pool import StaticPool
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from reset_api.database.database import get_session
from reset_api.main import app
from reset_api.models.password_reset import PasswordResetToken


@pytest.fixture(scope="function")
def test_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture(name="session")
def session_fixture(test_engine):
    """Provide a test database session."""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session):
    """Test client whose requests use the test session."""

    def _get_test_session():
        yield session

    app.dependency_overrides[get_session] = _get_test_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(name="token_factory")
def token_factory_fixture(session):
    """
    Provide a factory persisting PasswordResetToken records.

    Returns:
        factory: `_create(token, email, expires_in)` where `expires_in` is a timedelta
        relative to now (negative for already expired tokens).
    """

    def _create(
        token: str = "abc123",
        email: str = "user@example.com",
        expires_in: timedelta = timedelta(hours=1),
    ) -> PasswordResetToken:
        record = PasswordResetToken(
            token=token,
            email=email,
            expires_at=datetime.now(timezone.utc) + expires_in,
        )
        session.add(record)
        session.commit()
        session.refresh(record)
        return record

    return _create


@pytest.fixture(scope="function")
def mock_session():
    """Provide a mock database session."""
    return MagicMock(spec=Session)
