# =============================================================================
# DOG ADOPTION PLATFORM API - TEST CONFIGURATION
# =============================================================================
# File: tests/conftest.py
# Description: Pytest fixtures for testing with file-backed SQLite and fakeredis
# =============================================================================

from typing import AsyncGenerator, Callable, Generator, Tuple

import fakeredis
import fakeredis.aioredis
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from dog_adoption.auth.service import AuthService
from dog_adoption.core.config import Settings
from dog_adoption.core.context import AppContext
from dog_adoption.core.security import PasswordManager, JWTManager
from dog_adoption.db.adapters.redis_adapter import RedisAdapter
from dog_adoption.db.adapters.sqlite_adapter import SQLiteAdapter
from dog_adoption.dogs.service import DogService
from dog_adoption.main import create_application


TEST_SECRET = "test-secret-key-for-the-dog-adoption-suite-0123456789"
DEFAULT_PASSWORD = "secret123"


# =============================================================================
# SETTINGS FIXTURES
# =============================================================================

@pytest.fixture
def make_settings(tmp_path) -> Callable[..., Settings]:
    """
    Build settings pointing at a per-test SQLite file.

    Argon2 costs are lowered so hashing does not dominate the suite.
    """
    def _make(**overrides) -> Settings:
        values = dict(
            _env_file=None,
            app_env="development",
            db_type="sqlite",
            sqlite_path=str(tmp_path / "dog_adoption_test.db"),
            jwt_secret_key=TEST_SECRET,
            argon2_memory_cost=1024,
            argon2_time_cost=1,
            argon2_parallelism=1,
            bcrypt_rounds=4,
            rate_limit_max_requests=1000,
            log_level="WARNING",
        )
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def settings(make_settings) -> Settings:
    """Default test settings."""
    return make_settings()


@pytest.fixture
def password_manager(settings: Settings) -> PasswordManager:
    return PasswordManager(settings)


@pytest.fixture
def jwt_manager(settings: Settings) -> JWTManager:
    return JWTManager(settings)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest_asyncio.fixture(scope="function")
async def db_adapter(settings: Settings) -> AsyncGenerator[SQLiteAdapter, None]:
    """
    Create a file-backed SQLite adapter with a fresh schema.

    A file (not :memory:) lets several connections run concurrently.
    """
    adapter = SQLiteAdapter(settings)
    await adapter.connect()
    await adapter.create_tables()

    yield adapter

    await adapter.disconnect()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_adapter: SQLiteAdapter) -> AsyncGenerator[AsyncSession, None]:
    """
    Create database session for testing.

    Each test gets its own session, committed at the end.
    """
    async with db_adapter.get_session() as session:
        yield session


@pytest.fixture
def auth_service(
    db_session: AsyncSession,
    password_manager: PasswordManager,
    jwt_manager: JWTManager,
) -> AuthService:
    return AuthService(
        db_session,
        password_manager=password_manager,
        jwt_manager=jwt_manager,
    )


@pytest.fixture
def dog_service(db_session: AsyncSession) -> DogService:
    return DogService(db_session)


# =============================================================================
# APPLICATION FIXTURES
# =============================================================================

def build_context(settings: Settings) -> AppContext:
    """Application context with a private fakeredis server."""
    redis = RedisAdapter(
        settings,
        client=fakeredis.aioredis.FakeRedis(
            server=fakeredis.FakeServer(),
            decode_responses=True,
        ),
    )
    return AppContext(
        settings=settings,
        db=SQLiteAdapter(settings),
        redis=redis,
    )


@pytest.fixture
def make_client(make_settings) -> Generator[Callable[..., TestClient], None, None]:
    """
    Factory for started test clients.

    The client is entered as a context manager so the lifespan runs
    (tables created, Redis connected) and is closed after the test.
    """
    clients = []

    def _make(**overrides) -> TestClient:
        app = create_application(build_context(make_settings(**overrides)))
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def test_client(make_client) -> TestClient:
    """Started test client with default test settings."""
    return make_client()


# =============================================================================
# USER HELPERS
# =============================================================================

def register_user(
    client: TestClient,
    username: str,
    password: str = DEFAULT_PASSWORD,
) -> Tuple[str, str]:
    """Register through the API and return (token, user_id)."""
    response = client.post(
        "/api/auth/register",
        json={"username": username, "password": password},
    )
    assert response.status_code == 201, response.text
    data = response.json()["data"]
    return data["token"], data["user"]["id"]


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_dog(
    client: TestClient,
    token: str,
    name: str = "Rex",
    description: str = "Friendly retriever",
) -> dict:
    """Register a dog through the API and return its JSON."""
    response = client.post(
        "/api/dogs",
        json={"name": name, "description": description},
        headers=auth_headers(token),
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["dog"]
