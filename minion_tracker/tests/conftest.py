import pytest
import pytest_asyncio
from typing import AsyncGenerator, Awaitable, Callable
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from minion_tracker.main import app
from minion_tracker.core.database import get_db, init_schema, make_session_factory
from minion_tracker.schemas.minion import MinionCreate, MinionRecord
from minion_tracker.services.minion_store import MinionStore

# Use SQLite in memory for tests; StaticPool keeps the single connection
# (and therefore the database) alive for the whole test
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """A fresh database per test, so tests never see each other's minions."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_schema(test_engine)

    yield test_engine

    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    Creates a database session for each test.
    """
    session_factory = make_session_factory(engine)
    async with session_factory() as session_obj:
        try:
            yield session_obj
        except Exception:
            await session_obj.rollback()
            raise
        finally:
            await session_obj.close()


@pytest.fixture
def store(session: AsyncSession) -> MinionStore:
    return MinionStore(session)


@pytest_asyncio.fixture
async def client(session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an HTTP client that uses the test database session.
    """

    async def _get_test_db():
        yield session

    app.dependency_overrides[get_db] = _get_test_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    # Clean up
    app.dependency_overrides.clear()


@pytest.fixture
def create_test_minion(store: MinionStore) -> Callable[..., Awaitable[MinionRecord]]:
    """
    Fixture factory that inserts a minion through the store.
    """

    async def _create_minion(name: str = "Goblin", **fields) -> MinionRecord:
        data = {"hp": 7, "max_hp": 7, "ac": 15, "attack": 4, "damage": "1d6+2"}
        data.update(fields)
        return await store.create(MinionCreate(name=name, **data))

    return _create_minion
