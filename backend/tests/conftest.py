"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Tests never read a real .env secret or reach a real database
    - Every test gets a fresh in-memory SQLite database

Design Decisions:
    - SQLite in-memory via aiosqlite: fast, no external dependency, the User
      table uses no PostgreSQL-specific features
"""

import os

# Ensure tests don't accidentally use real secrets or databases
os.environ.setdefault("API_TOKEN", "test-secret-token")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from user_api.db.base import Base  # noqa: E402
from user_api.infrastructure.database import DatabaseSessionManager  # noqa: E402
import user_api.models  # noqa: E402,F401


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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
def db_manager(test_engine):
    return DatabaseSessionManager(test_engine)
