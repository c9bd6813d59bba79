"""Pytest configuration and fixtures."""

import pytest
from collections.abc import AsyncGenerator, Callable

import httpx
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from mentorhub.api.deps import get_ai, get_cache, get_store
from mentorhub.cache import QueryCache
from mentorhub.db.base import Base
from mentorhub.main import app
from mentorhub.services.ai_functions import AIFunctionsClient
from mentorhub.store import DataStore

# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

AI_EMAIL_TEXT = "Dear Ms. Rivera,\n\nThank you for the science fair invitation."
AI_RESEARCH_TEXT = "Three similar projects exist; the novel angle is low-cost sensors."


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE actions unless asked
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with every table created."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(test_engine.sync_engine, "connect", _enable_foreign_keys)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
def store(session_factory: async_sessionmaker[AsyncSession]) -> DataStore:
    return DataStore(session_factory)


@pytest.fixture
async def broken_store() -> AsyncGenerator[DataStore, None]:
    """A store whose database cannot be opened; every call is unavailable."""
    broken_engine = create_async_engine("sqlite+aiosqlite:////nonexistent-dir/mentorhub/test.db")
    yield DataStore(async_sessionmaker(broken_engine, class_=AsyncSession))
    await broken_engine.dispose()


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache()


# =============================================================================
# AI FUNCTIONS
# =============================================================================


@pytest.fixture
def ai_requests() -> list[httpx.Request]:
    """Every request the fake AI functions received."""
    return []


@pytest.fixture
def ai(ai_requests: list[httpx.Request]) -> AIFunctionsClient:
    """AI client backed by a fake that answers both functions successfully."""

    def handler(request: httpx.Request) -> httpx.Response:
        ai_requests.append(request)
        if request.url.path.endswith("/ai-email"):
            return httpx.Response(200, json={"email": AI_EMAIL_TEXT})
        if request.url.path.endswith("/ai-research"):
            return httpx.Response(200, json={"result": AI_RESEARCH_TEXT})
        return httpx.Response(404, json={"error": "unknown function"})

    return make_ai_client(handler)


@pytest.fixture
def failing_ai(ai_requests: list[httpx.Request]) -> AIFunctionsClient:
    """AI client whose functions are deployed but always fail."""

    def handler(request: httpx.Request) -> httpx.Response:
        ai_requests.append(request)
        return httpx.Response(500, json={"error": "function crashed"})

    return make_ai_client(handler)


def make_ai_client(handler: Callable[[httpx.Request], httpx.Response]) -> AIFunctionsClient:
    return AIFunctionsClient(
        "http://functions.test/functions/v1",
        api_key="test-key",
        transport=httpx.MockTransport(handler),
    )


# =============================================================================
# HTTP CLIENT
# =============================================================================


@pytest.fixture
async def client(store: DataStore, cache: QueryCache, ai: AIFunctionsClient) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints against the test database."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_ai] = lambda: ai

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
