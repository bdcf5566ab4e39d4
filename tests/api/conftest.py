"""API-specific test fixtures."""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

import cockpit.db.base as db_mod
import cockpit.db.redis as redis_mod
from cockpit.api.deps import get_compute_client


@pytest_asyncio.fixture
async def client(session_factory, fake_redis, compute):
    """In-process client against the app with sqlite, fakeredis and a recorded compute client.

    ASGITransport does not run the lifespan, so the module globals are wired here.
    """
    from cockpit.main import app

    db_mod._session_factory = session_factory
    redis_mod._redis = fake_redis
    app.dependency_overrides[get_compute_client] = lambda: compute

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    db_mod._session_factory = None
    redis_mod._redis = None
