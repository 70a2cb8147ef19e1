"""Pytest configuration and fixtures for linkvault.

Environment defaults are set before any linkvault import so Settings
validation passes without a .env file. HTTP tests run the app through
httpx ASGITransport with repositories replaced by in-memory fakes and the
cache store by MemoryCache; repository tests need Postgres and are marked
requires_db.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from linkvault.api.v1.dependencies import (
    get_category_repo,
    get_category_repo_for_write,
    get_link_repo,
    get_link_repo_for_write,
    get_user_repo_for_write,
)
from linkvault.application.cache import CacheEvent
from linkvault.application.services import CacheInvalidator
from linkvault.application.use_cases import BookmarkQueryService
from linkvault.core.config import get_settings
from linkvault.infrastructure.cache import MemoryCache
from linkvault.infrastructure.persistence import database
from linkvault.infrastructure.security.jwt import create_access_token
from linkvault.main import create_app
from tests.fakes import (
    FakeCategoryRepository,
    FakeLinkRepository,
    FakeStore,
    FakeUserRepository,
)


class FakeClock:
    """Monotonic clock for MemoryCache that tests advance by hand."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> MemoryCache:
    return MemoryCache(clock=clock)


@pytest.fixture
def events() -> list[CacheEvent]:
    """Cache events captured through the observer hook."""
    return []


@pytest.fixture
def link_repo(store: FakeStore) -> FakeLinkRepository:
    return FakeLinkRepository(store)


@pytest.fixture
def category_repo(store: FakeStore) -> FakeCategoryRepository:
    return FakeCategoryRepository(store)


@pytest.fixture
def queries(
    link_repo: FakeLinkRepository,
    category_repo: FakeCategoryRepository,
    cache: MemoryCache,
    events: list[CacheEvent],
) -> BookmarkQueryService:
    return BookmarkQueryService(link_repo, category_repo, cache, observer=events.append)


@pytest.fixture
def invalidator(cache: MemoryCache, events: list[CacheEvent]) -> CacheInvalidator:
    return CacheInvalidator(cache, observer=events.append)


@pytest.fixture
def app(store: FakeStore, cache: MemoryCache):
    """App wired to the fake store and an in-process cache (no lifespan needed).

    Password hashing (bcrypt, 4 rounds) and JWTs are real.
    """
    get_settings.cache_clear()
    application = create_app()
    application.state.cache = cache
    application.state.cache_observer = None
    application.dependency_overrides.update(
        {
            get_user_repo_for_write: lambda: FakeUserRepository(store),
            get_category_repo: lambda: FakeCategoryRepository(store),
            get_category_repo_for_write: lambda: FakeCategoryRepository(store),
            get_link_repo: lambda: FakeLinkRepository(store),
            get_link_repo_for_write: lambda: FakeLinkRepository(store),
        }
    )
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def bearer(user_id: int) -> dict[str, str]:
    """Authorization header for a user id."""
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user_id)})}"}


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository tests. Rolls back after each test.

    Requires DATABASE_URL pointing at a migrated Postgres (alembic upgrade
    head). Skips when it is not set; run without DB via:
    pytest -m 'not requires_db'.
    """
    if not get_settings().database_url:
        pytest.skip("Postgres not configured: set DATABASE_URL, then run: alembic upgrade head")
    session_factory = database._ensure_engine()
    async with session_factory() as session:
        yield session
        await session.rollback()
    await database.dispose_engine()
