"""Shared test fixtures: sqlite-backed sessions, fake Redis, fake compute functions."""

import json
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import fakeredis.aioredis
import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cockpit.core.config import get_settings
from cockpit.db.base import Base
from cockpit.services.compute_client import ComputeClient
from cockpit.services.query_cache import QueryCache


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def fake_redis():
    """Fresh fakeredis instance per test."""
    r = fakeredis.aioredis.FakeRedis(decode_responses=True)
    yield r
    await r.flushall()
    await r.aclose()


@pytest_asyncio.fixture
async def engine(tmp_path):
    """File-backed sqlite engine so concurrent sessions see the same data."""
    import cockpit.db.models  # noqa: F401

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'cockpit.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def cache(fake_redis) -> QueryCache:
    return QueryCache(fake_redis, ttl_seconds=60)


class ComputeRecorder:
    """Records compute function calls and answers with a canned response."""

    def __init__(self):
        self.calls: list[dict] = []
        self.status_code = 200
        self.response: object = {"ok": True}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append({
            "url": str(request.url),
            "headers": dict(request.headers),
            "body": json.loads(request.content),
        })
        return httpx.Response(self.status_code, json=self.response)


@pytest.fixture
def compute_recorder() -> ComputeRecorder:
    return ComputeRecorder()


@pytest.fixture
def compute(compute_recorder) -> ComputeClient:
    return ComputeClient(
        base_url="http://compute.test",
        api_key="test-key",
        transport=httpx.MockTransport(compute_recorder.handler),
    )


@pytest.fixture
def project_id():
    return uuid4()


@pytest.fixture
def clock():
    """Strictly increasing timestamps so ordering by created_at is deterministic."""
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    ticks = iter(range(10_000))

    def _next():
        return start + timedelta(minutes=next(ticks))

    return _next


@pytest.fixture
def add_rows(session_factory):
    """Insert ORM rows in one transaction."""

    async def _add(*rows):
        async with session_factory() as session:
            session.add_all(rows)
            await session.commit()
        return rows

    return _add
