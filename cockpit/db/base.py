"""Declarative base, portable column types and the async engine for cockpit tables.

Production runs on PostgreSQL (asyncpg); the same models run on sqlite
(aiosqlite), which is why JSON columns go through ``JSONType``.
"""

import structlog
from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from cockpit.core.config import get_settings

logger = structlog.get_logger(__name__)

# JSONB on PostgreSQL, plain JSON elsewhere
JSONType = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    pass


_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _engine_options(db_url: str, echo: bool) -> dict:
    options = {"echo": echo}
    # Pre-ping only for server backends
    if make_url(db_url).get_backend_name() != "sqlite":
        options["pool_pre_ping"] = True
    return options


async def init_db(url: str | None = None) -> None:
    """Create the engine and session factory, then the scenario tables. Idempotent."""
    global _engine, _session_factory

    if _engine is not None:
        return

    settings = get_settings()
    db_url = url or settings.database_url

    _engine = create_async_engine(db_url, **_engine_options(db_url, settings.debug))
    # Services hand ORM rows to pydantic after commit, so attributes must stay loaded
    _session_factory = async_sessionmaker(_engine, class_=AsyncSession, expire_on_commit=False)

    import cockpit.db.models  # noqa: F401  (registers tables on Base.metadata)

    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("scenario_tables_ready", backend=_engine.url.get_backend_name(),
                tables=len(Base.metadata.tables))


async def close_db() -> None:
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the session factory every service is built with.

    Raises RuntimeError if init_db() has not been called.
    """
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _session_factory
