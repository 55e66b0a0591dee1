"""
Database connection setup.

Creates the async SQLAlchemy engine lazily from settings and provides the
``get_db`` dependency that yields one session per request. Nothing here
connects at import time, so tests can swap in their own engine before the
first request.
"""

from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from minion_tracker.core.config import settings
from minion_tracker.core.logging_config import get_logger
from minion_tracker.models.base import Base

logger = get_logger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def create_engine_from_url(url: str, echo: bool = False) -> AsyncEngine:
    """Build an async engine. SQLite connections are shared with the event loop thread."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_async_engine(url, echo=echo, future=True, connect_args=connect_args)


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine, autoflush=False, expire_on_commit=False, class_=AsyncSession
    )


def get_engine() -> AsyncEngine:
    """Return the process-wide engine, creating it on first use."""
    global _engine, _session_factory
    if _engine is None:
        _engine = create_engine_from_url(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
        _session_factory = make_session_factory(_engine)
        logger.info("Database engine created", extra={"url": _engine.url.render_as_string()})
    return _engine


async def reset_engine() -> None:
    """Dispose the engine so the next get_engine() call builds a fresh one."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        logger.info("Database engine disposed")
    _engine = None
    _session_factory = None


async def init_schema(engine: AsyncEngine) -> None:
    """Create the minions table if it does not exist yet."""
    # Importing the model registers its table on Base.metadata
    from minion_tracker.models import minion  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured", extra={"tables": sorted(Base.metadata.tables)})


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get a database session.
    """
    get_engine()
    async with _session_factory() as session:
        yield session
