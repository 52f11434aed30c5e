"""
Shared fixtures: an app wired to an in-memory SQLite database and an
HTTP client talking to it over ASGI.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from config.settings import Settings
from database.models import Base
from database.session import get_db_session
from main import create_app

TEST_SECRET = "test-token-secret"


@pytest.fixture
def settings():
    return Settings(
        token_secret=TEST_SECRET,
        password_hash_rounds=4,
        database_url="sqlite+aiosqlite://",
        static_dir="__missing_static_dir__",
    )


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def app(settings, session_factory):
    application = create_app(settings, create_tables=False)

    async def _test_session():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session] = _test_session
    return application


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def signed_up(client):
    """Sign up a default user; returns the response body."""
    resp = await client.post(
        "/auth/signup",
        json={"email": "ada@example.com", "password": "secret123", "name": "Ada"},
    )
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def auth_headers(signed_up):
    return {"Authorization": f"Bearer {signed_up['authToken']}"}
