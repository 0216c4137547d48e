"""
Shared fixtures: in-memory SQLite, a scripted completion provider and an
authenticated TestClient.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from interview_coach.main import app
from interview_coach.core.auth_dependency import get_db
from interview_coach.db.base import Base
from interview_coach.db.seed import initialize_defaults
from interview_coach.llm import get_provider_factory
from tests.helpers import FakeProvider, signup
import interview_coach.db.models  # noqa: F401


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function", autouse=True)
def setup_db():
    """Create and drop tables for each test."""
    Base.metadata.create_all(bind=test_engine)
    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Provide a database session for tests."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def seeded(db_session):
    """Built-in templates and personas (ids 1-3)."""
    initialize_defaults(db_session)
    return db_session


@pytest.fixture
def provider():
    fake = FakeProvider()
    app.dependency_overrides[get_provider_factory] = lambda: (lambda: fake)
    return fake


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def test_user(client):
    """Signed-up user; `client` carries its session cookie afterwards."""
    return signup(client)


@pytest.fixture
def auth_client(client, test_user):
    return client
