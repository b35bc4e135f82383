"""Shared test fixtures and configuration."""
import os

# Point the application at throwaway settings before anything imports it
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TIMEZONE", "UTC")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.main import app  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import enable_sqlite_foreign_keys  # noqa: E402
from app.api.deps import get_db  # noqa: E402
from tests.utils import auth_headers, make_event, make_user  # noqa: E402


# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(autouse=True)
def disable_rate_limiting_for_tests(request):
    """Disable rate limiting for all tests except rate limiting tests."""
    from app.core.rate_limit import limiter

    # Check if this is a rate limiting test (marked with @pytest.mark.rate_limit)
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
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


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
def member(db_session):
    """A regular member (role anggota)."""
    return make_user(db_session, name="Siti Rahma", email="siti@example.org", nim="2101001")


@pytest.fixture
def other_member(db_session):
    return make_user(db_session, name="Budi Santoso", email="budi@example.org", nim="2101002")


@pytest.fixture
def manager(db_session):
    """A board member (role pengurus) allowed to manage tokens and attendance."""
    return make_user(db_session, name="Dewi Lestari", email="dewi@example.org", role="pengurus")


@pytest.fixture
def event(db_session):
    return make_event(db_session, name="Weekly Meeting", status="ongoing")


@pytest.fixture
def member_headers(member):
    return auth_headers(member)


@pytest.fixture
def other_member_headers(other_member):
    return auth_headers(other_member)


@pytest.fixture
def manager_headers(manager):
    return auth_headers(manager)
