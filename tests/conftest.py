"""Pytest configuration and fixtures."""

import os

# Cheap password hashing for tests; must be set before settings are loaded
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from datetime import datetime, timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from siteadmin.core.config import get_settings
from siteadmin.core.deps import get_db
from siteadmin.core.security import create_access_token, get_password_hash
from siteadmin.db.base import Base
from siteadmin.db import models_registry  # noqa: F401 - Import to register models
from siteadmin.main import app
from siteadmin.models.user import User
from siteadmin.models.visitor import Visitor

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

CHROME_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
FIREFOX_UA = "Mozilla/5.0 (X11; Ubuntu; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_maker(test_engine):
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client with overridden dependencies."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def settings():
    """Application settings; tests may monkeypatch attributes."""
    return get_settings()


@pytest_asyncio.fixture(scope="function")
async def test_user(db_session: AsyncSession) -> User:
    """Create test user."""
    user = User(
        id="test-user",
        username="testuser",
        hashed_password=get_password_hash("testpassword"),
        is_active=True,
        is_superuser=False,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture(scope="function")
async def admin_user(db_session: AsyncSession) -> User:
    """Create admin user."""
    user = User(
        id="admin",
        username="admin",
        hashed_password=get_password_hash("admin"),
        is_active=True,
        is_superuser=True,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Create authorization headers."""
    token = create_access_token(
        data={"sub": test_user.id, "username": test_user.username}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_auth_headers(admin_user: User) -> dict:
    """Create admin authorization headers."""
    token = create_access_token(
        data={"sub": admin_user.id, "username": admin_user.username}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture(scope="function")
async def sample_visitors(db_session: AsyncSession) -> list[Visitor]:
    """Create sample visitors.

    Two are online, one is banned and one was last seen two months ago.
    """
    now = datetime.now()
    visitors = [
        Visitor(
            first_visit=now - timedelta(minutes=30),
            last_visit=now - timedelta(minutes=1),
            first_visit_site="example.com",
            last_activity=now - timedelta(minutes=1),
            browser=CHROME_UA,
            os="Windows 10",
            referer="google.com",
            city="Prague",
            country="CZ",
            ip_address="203.0.113.10",
        ),
        Visitor(
            first_visit=now - timedelta(days=3),
            last_visit=now - timedelta(hours=2),
            first_visit_site="example.com",
            last_activity=now - timedelta(seconds=30),
            browser=FIREFOX_UA,
            os="Ubuntu",
            referer="Unknown",
            city="Brno",
            country="CZ",
            ip_address="203.0.113.11",
        ),
        Visitor(
            first_visit=now - timedelta(days=20),
            last_visit=now - timedelta(days=2),
            first_visit_site="example.com",
            last_activity=now - timedelta(days=2),
            browser=CHROME_UA,
            os="Windows 10",
            referer="google.com",
            city="Berlin",
            country="DE",
            ip_address="198.51.100.7",
            banned_status=True,
            ban_reason="spam",
            banned_time=now - timedelta(days=1),
        ),
        Visitor(
            first_visit=now - timedelta(days=70),
            last_visit=now - timedelta(days=60),
            first_visit_site="example.com",
            last_activity=now - timedelta(days=60),
            browser=FIREFOX_UA,
            os="Ubuntu",
            referer="news.ycombinator.com",
            city="Prague",
            country="CZ",
            ip_address="192.0.2.44",
        ),
    ]

    for visitor in visitors:
        db_session.add(visitor)
    await db_session.commit()

    return visitors
