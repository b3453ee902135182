"""API test fixtures — app built from test Settings + httpx clients.

Invariants:
    - App built through create_app, same wiring as production
    - db_manager attached to app.state directly (ASGITransport skips lifespan)
    - `client` carries the valid bearer token, `anon_client` carries none
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from user_api.config import Settings
from user_api.main import create_app
from user_api.models.user import User

TEST_TOKEN = "test-secret-token"


@pytest.fixture
def settings():
    return Settings(
        api_token=TEST_TOKEN,
        database_url="sqlite+aiosqlite:///:memory:",
        _env_file=None,
    )


@pytest.fixture
def app(settings, db_manager):
    application = create_app(settings)
    application.state.db_manager = db_manager
    return application


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
        headers={"Authorization": f"Bearer {TEST_TOKEN}"},
    ) as c:
        yield c


@pytest.fixture
async def anon_client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def count_users(test_session_factory):
    """Count persisted users with a fresh session (sees committed state only)."""
    async def _count() -> int:
        async with test_session_factory() as session:
            result = await session.execute(select(func.count()).select_from(User))
            return result.scalar_one()
    return _count


@pytest.fixture
def api_token():
    return TEST_TOKEN
