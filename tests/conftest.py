# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Set test environment before importing app
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["SEED_DEMO_USERS"] = "false"

from tpa_hr.database import enable_sqlite_savepoints, get_db
from tpa_hr.main import app
from tpa_hr.models import Base, User, UserRole
from tpa_hr.services import AuthService
from tpa_hr.services.seed_service import create_user, seed_default_users

# Test database setup
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
enable_sqlite_savepoints(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "testpassword123"


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth(db_session) -> AuthService:
    """AuthService bound to the test database session."""
    return AuthService(db_session)


@pytest.fixture
def test_user(db_session) -> User:
    """Create an active employee account."""
    return create_user(
        db_session, "test@example.com", TEST_PASSWORD, role=UserRole.EMPLOYEE
    )


@pytest.fixture
def inactive_user(db_session) -> User:
    """Create a deactivated account."""
    return create_user(
        db_session, "former@example.com", TEST_PASSWORD, is_active=False
    )


@pytest.fixture
def seeded_users(db_session) -> list[User]:
    """Seed the demo accounts (admin@tpa.com / admin123 and friends)."""
    return seed_default_users(db_session)


@pytest.fixture
def auth_token(client, test_user) -> str:
    """Log the test user in over HTTP and return the session token."""
    response = client.post(
        "/api/v1/auth/login",
        json={"email": "test@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    return response.json()["token"]
