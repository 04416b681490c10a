"""
StackIt Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a fresh in-memory SQLite database (aiosqlite +
       StaticPool, so all sessions share one connection) with the full
       schema created from the ORM metadata. API tests talk to the real
       FastAPI app through httpx's ASGITransport, with get_db_session
       overridden to use that database.

Fixture Hierarchy:
    ├── db_engine:       fresh schema per test
    ├── session_factory: async_sessionmaker bound to db_engine
    ├── db_session:      one session for service-level tests
    ├── test_client:     HTTPX AsyncClient against the app
    ├── register_user:   helper → (user json, auth headers)
    ├── alice / bob:     two registered users with their headers
    └── admin:           a registered user promoted to role 'admin'
"""

import os

# Override settings for testing BEFORE any stackit imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"
os.environ["AUTH_RATE_LIMIT_REQUESTS"] = "100000"

from typing import AsyncGenerator, Dict, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import stackit.models  # noqa: F401  (registers tables on Base.metadata)
from stackit.database import Base, get_db_session
from stackit.models.user import ROLE_ADMIN, User


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """A plain session for calling services directly."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession for tests that only check which calls a service makes.

    Usage:
        await notification_service.notify(mock_db_session, ...)
        mock_db_session.add.assert_not_called()
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# API Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient wired to the StackIt app and the per-test database.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from stackit.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(test_client):
    """
    Returns an async helper that registers a user and gives back
    (user json, {"Authorization": "Bearer ..."}).
    """

    async def _register(username: str, password: str = "secret123") -> Tuple[dict, Dict[str, str]]:
        response = await test_client.post(
            "/api/auth/register",
            json={"username": username, "email": f"{username}@example.com", "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], {"Authorization": f"Bearer {body['token']}"}

    return _register


@pytest_asyncio.fixture
async def alice(register_user):
    return await register_user("alice")


@pytest_asyncio.fixture
async def bob(register_user):
    return await register_user("bob")


@pytest_asyncio.fixture
async def admin(register_user, session_factory):
    user, headers = await register_user("moderator")
    async with session_factory() as session:
        await session.execute(update(User).where(User.username == "moderator").values(role=ROLE_ADMIN))
        await session.commit()
    return user, headers


@pytest.fixture
def ask(test_client):
    """Async helper: post a question as `headers` and return its json."""

    async def _ask(headers, title="How do I use asyncio?", description="Details here", tags=None):
        response = await test_client.post(
            "/api/questions",
            json={"title": title, "description": description, "tags": tags or []},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["question"]

    return _ask


@pytest.fixture
def answer(test_client):
    """Async helper: answer `question_id` as `headers` and return the answer json."""

    async def _answer(headers, question_id, content="Use asyncio.run()"):
        response = await test_client.post(
            "/api/answers",
            json={"question_id": question_id, "content": content},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["answer"]

    return _answer
