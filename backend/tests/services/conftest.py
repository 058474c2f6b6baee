"""Service test fixtures — async DB, key-value store, fake provider, and test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager patched so readiness checks hit the test engine
    - get_provider_hub overridden with a FakeHub (no network)
    - get_rng overridden with a seeded Random (deterministic draws)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, same ORM code as production
    - StaticPool: one connection, so every session sees the same in-memory DB
"""

import random

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from lucid.db.base import Base
from lucid.infrastructure.database import get_db, DatabaseSessionManager
from lucid.infrastructure.kv_store import SqlKeyValueStore
import lucid.infrastructure.database as db_module
from lucid.api.dependencies import get_provider_hub, get_rng
from lucid.main import app
from tests.services.fake_provider import FakeHub, FakeProvider


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
        poolclass=StaticPool, connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def store(test_db):
    return SqlKeyValueStore(test_db)


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def hub(fake_provider):
    return FakeHub(fake_provider)


@pytest.fixture
async def client(test_engine, test_session_factory, hub):
    """FastAPI test client with DB, provider hub, and RNG overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_provider_hub] = lambda: hub
    app.dependency_overrides[get_rng] = lambda: random.Random(7)

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def configured_client(client):
    """Client whose provider config already holds an API key."""
    res = await client.put(
        "/api/v1/config",
        json={"provider": "gemini", "api_key": "test-key-123", "user_name": "Ann"},
    )
    assert res.status_code == 200
    return client
