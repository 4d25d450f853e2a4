"""
Shared test fixtures for the Storefront API test suite.

Async throughout (aiosqlite + AsyncSession + httpx AsyncClient).
"""

import os
import sys
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256-signing"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["FIRST_ADMIN_EMAIL"] = ""

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.v1.deps import get_db
from app.core.policy import Role
from app.core.security import get_password_hash
from app.db.base import Base
from app.db.session import enable_sqlite_foreign_keys
from app.main import app
from app.services import users as users_service

API = "/v1"

# One in-memory database shared by every connection in the test session
test_engine = create_async_engine(
    "sqlite+aiosqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(test_engine)

TestingSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@pytest.fixture(autouse=True)
async def setup_db():
    """Create all tables before usage and drop after."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with TestingSessionLocal() as session:
        yield session


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with TestingSessionLocal() as session:
        yield session


# ── Auth helpers ────────────────────────────────────────────────────
async def register(client: AsyncClient, name: str, email: str, password: str):
    return await client.post(
        f"{API}/auth/register",
        json={"name": name, "email": email, "password": password},
    )


async def login_headers(client: AsyncClient, email: str, password: str) -> dict[str, str]:
    resp = await client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
async def user_headers(async_client: AsyncClient) -> dict[str, str]:
    """Bearer headers for a freshly registered regular user."""
    await register(async_client, "Regular User", "user@example.com", "userpass123")
    return await login_headers(async_client, "user@example.com", "userpass123")


@pytest.fixture
async def admin_headers(async_client: AsyncClient, db_session: AsyncSession) -> dict[str, str]:
    """Bearer headers for an admin account created directly in the store."""
    await users_service.create_user(
        db_session,
        name="Site Admin",
        email="admin@example.com",
        hashed_password=get_password_hash("adminpass123"),
        role=Role.ADMIN,
    )
    return await login_headers(async_client, "admin@example.com", "adminpass123")
