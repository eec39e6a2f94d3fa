"""Pytest configuration and fixtures."""

import os
import tempfile

# Uploads go to a scratch directory; must be set before the app is imported
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="dev-assets-uploads-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.database import Base, get_db
from src.main import app
from src.services.auth import TokenService
from src.services.storage import AvatarStorage, get_avatar_storage
from src.services.token_registry import InMemoryTokenRegistry, get_token_registry


class AuthHeaders(dict):
    """Dict subclass that also stores the registered user's details."""

    def __init__(
        self, *args, user_id: int | None = None, email: str = "", token: str = "", **kwargs
    ):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email
        self.token = token


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/dev_assets", "/dev_assets_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def token_registry():
    """Fresh revocation registry for each test."""
    return InMemoryTokenRegistry()


@pytest.fixture
def token_service(token_registry):
    return TokenService(token_registry)


@pytest.fixture
def storage(tmp_path):
    """Avatar storage writing into the test's temporary directory."""
    return AvatarStorage(upload_dir=str(tmp_path), default_avatar="no-photo.jpg")


@pytest.fixture(scope="function")
def client(db, token_registry, storage):
    """Create a test client with database, registry and storage overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_registry] = lambda: token_registry
    app.dependency_overrides[get_avatar_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    """Return a function that registers a user and returns auth headers for them."""

    def register(name: str, nickname: str, email: str, password: str = "testpass123"):
        response = client.post(
            "/api/v1/auth/register",
            json={"name": name, "nickName": nickname, "email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        data = response.json()
        token = data["token"]
        return AuthHeaders(
            {"Authorization": f"Bearer {token}"},
            user_id=data["user"]["id"],
            email=email,
            token=token,
        )

    return register


@pytest.fixture
def auth_headers(register_user):
    """Create a user and return auth headers with user info."""
    return register_user("Alice Example", "alice", "alice@example.com")


@pytest.fixture
def other_auth_headers(register_user):
    """A second user, for checks across owners."""
    return register_user("Bob Example", "bob", "bob@example.com")


@pytest.fixture
def asset(client, auth_headers):
    """An asset owned by the auth_headers user."""
    response = client.post(
        "/api/v1/assets",
        headers=auth_headers,
        json={"name": "My Art", "description": "A drawing", "tags": ["art", "sketch"]},
    )
    assert response.status_code == 201, response.text
    return response.json()
