"""Test fixtures — a throwaway SQLite database per test.

Learn: Each test gets its own database file under tmp_path with the schema
created from the models, and the app's get_db dependency is pointed at
it. Auth is NOT mocked: tests register users and send real bearer
tokens, so the whole gate runs on every protected request.
"""

import os
import uuid

# Set test environment variables before importing app modules
os.environ.setdefault("INKPOST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("INKPOST_JWT_SECRET", "test-secret-for-inkpost-tests-0123456789")
os.environ.setdefault("INKPOST_BCRYPT_ROUNDS", "4")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from inkpost.db.engine import get_db
from inkpost.db.models import Base
from inkpost.main import app


@pytest_asyncio.fixture()
async def session_factory(tmp_path):
    """Session factory bound to a fresh database with all tables created."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'inkpost.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture()
async def client(session_factory):
    """HTTP client with get_db overridden to use the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture()
def tokens():
    """The TokenService the app was started with."""
    return app.state.tokens


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_user(client):
    """Register a user through the API; returns {"user": {...}, "token": ...}."""

    async def _make(username: str = "alice", password: str = "password123", email=None):
        email = email or f"{username}-{uuid.uuid4().hex[:8]}@example.com"
        r = await client.post(
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        assert r.status_code == 201, r.text
        data = r.json()["data"]
        data["headers"] = bearer(data["token"])
        return data

    return _make


@pytest.fixture()
def make_category(client):
    async def _make(headers: dict, name: str = "Engineering"):
        r = await client.post("/api/categories", json={"name": name}, headers=headers)
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make


@pytest.fixture()
def make_post(client):
    async def _make(headers: dict, category_id: str, title: str = "Hello World", **extra):
        body = {"title": title, "content": "Body text", "category": category_id, **extra}
        r = await client.post("/api/posts", json=body, headers=headers)
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make
