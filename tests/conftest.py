"""
Shared test fixtures.

Every test gets a fresh in-memory SQLite database (aiosqlite + StaticPool,
so all connections share the one database) with the full schema created.
"""

import os

# Must be set before any agora module reads settings
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CACHE_INVALIDATION_BACKEND"] = "log"
os.environ["SECRET_KEY"] = "test-secret-key-with-at-least-32-bytes!"

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from agora.api.dependencies.database import get_db
from agora.api.main import create_application
from agora.shared.adapters.cache_invalidator import LoggingCacheInvalidator
from agora.shared.db import create_session_factory
from agora.shared.models import Base, Notification, Post, User
from agora.shared.repositories import (
    SqlAlchemyNotificationRepository,
    SqlAlchemyPostRepository,
    SqlAlchemyUserRepository,
)
from agora.shared.utils.rate_limiter import RateLimiter
from agora.shared.utils.security import SecurityUtils


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed origin for seeded timestamps so ordering never depends on the clock
BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

DEFAULT_PASSWORD = "Passw0rd!"


@pytest.fixture
async def engine():
    """Fresh in-memory database with all tables."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """A session for direct repository tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def post_repo(db: AsyncSession) -> SqlAlchemyPostRepository:
    return SqlAlchemyPostRepository(db)


@pytest.fixture
def user_repo(db: AsyncSession) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(db)


@pytest.fixture
def notification_repo(db: AsyncSession) -> SqlAlchemyNotificationRepository:
    return SqlAlchemyNotificationRepository(db)


@pytest.fixture
def failing_notification_writes(db: AsyncSession):
    """Make any flush that carries a new Notification fail on the test session."""

    def _fail_on_notification(session, flush_context, instances):
        if any(isinstance(obj, Notification) for obj in session.new):
            raise RuntimeError("notification write failed")

    event.listen(db.sync_session, "before_flush", _fail_on_notification)
    yield
    event.remove(db.sync_session, "before_flush", _fail_on_notification)


# ═══════════════════════════════════════════════════════════════════════════════
# SEEDING HELPERS
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def make_user(db: AsyncSession):
    """Insert a user row; returns the ORM object."""
    counter = {"n": 0}

    async def _make_user(
        username: Optional[str] = None,
        email: Optional[str] = None,
        name: Optional[str] = None,
        password: Optional[str] = None,
    ) -> User:
        counter["n"] += 1
        n = counter["n"]
        user = User(
            email=email or f"user{n}@example.com",
            username=username if username is not None else f"user{n}",
            name=name or f"User {n}",
            password_hash=SecurityUtils.hash_password(password) if password else None,
            created_at=BASE_TIME + timedelta(seconds=n),
        )
        db.add(user)
        await db.commit()
        return user

    return _make_user


@pytest.fixture
def make_post(db: AsyncSession):
    """Insert a post row with a deterministic created_at (BASE_TIME + offset minutes)."""
    counter = {"n": 0}

    async def _make_post(author: User, content: Optional[str] = None, offset: Optional[int] = None) -> Post:
        counter["n"] += 1
        minutes = offset if offset is not None else counter["n"]
        post = Post(
            author_id=author.id,
            content=content or f"Post {counter['n']}",
            created_at=BASE_TIME + timedelta(minutes=minutes),
        )
        db.add(post)
        await db.commit()
        return post

    return _make_post


# ═══════════════════════════════════════════════════════════════════════════════
# HTTP
# ═══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def rate_limiter() -> RateLimiter:
    return RateLimiter()


@pytest.fixture
def cache_invalidator() -> LoggingCacheInvalidator:
    return LoggingCacheInvalidator()


@pytest.fixture
def app(session_factory, rate_limiter, cache_invalidator):
    """Application wired to the test database."""
    application = create_application(
        rate_limiter=rate_limiter,
        cache_invalidator=cache_invalidator,
    )

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def sign_up(client: AsyncClient):
    """
    Register through the API; returns (user dict, Authorization headers).

    Each call comes from its own client IP so the per-IP sign-up limit
    does not interfere with tests that need several accounts.
    """
    counter = {"n": 0}

    async def _sign_up(email: str, name: str = "Test User", username: Optional[str] = None):
        counter["n"] += 1
        body = {"email": email, "password": DEFAULT_PASSWORD, "name": name}
        if username:
            body["username"] = username
        response = await client.post(
            "/auth/sign-up",
            json=body,
            headers={"X-Forwarded-For": f"10.0.0.{counter['n']}"},
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return data["user"], {"Authorization": f"Bearer {data['accessToken']}"}

    return _sign_up
