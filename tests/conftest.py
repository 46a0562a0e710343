"""Shared test fixtures and configuration."""
import os

# Point the application engine at SQLite before edconsult is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///./edconsult_test.db")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from edconsult.main import app  # noqa: E402
from edconsult.db.base import Base  # noqa: E402
from edconsult.api.deps import get_db  # noqa: E402
from edconsult.core.rate_limit import limiter  # noqa: E402
from edconsult.core.security import create_access_token  # noqa: E402


# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(autouse=True)
def disable_rate_limiting_for_tests(request):
    """Disable rate limiting for all tests except rate limiting tests."""
    if "rate_limit" in request.keywords:
        limiter.reset()
        yield
        limiter.reset()
    else:
        limiter.enabled = False
        yield
        limiter.enabled = True


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh database for each test."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a new database session for a test."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with a test database."""
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
def admin_token():
    """Generate a valid admin JWT token."""
    return create_access_token({"sub": "1", "email": "admin@example.com", "role": "admin"})


@pytest.fixture
def client_token():
    """Token for a student (client role) account."""
    return create_access_token({"sub": "2", "email": "student@example.com", "role": "client"})


@pytest.fixture
def admin_client(client, admin_token):
    """Create a test client with an admin bearer token already set."""
    client.headers["Authorization"] = f"Bearer {admin_token}"
    return client
