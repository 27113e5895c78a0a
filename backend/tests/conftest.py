"""
Pytest fixtures for test database, client, and authentication.

Each test gets a fresh database built from Base.metadata: a throwaway SQLite
file by default, or whatever TEST_DATABASE_URL points at. Requests run
through the real commit-on-success / rollback-on-error session handling.
"""

import os

# Must be set before venue_platform is imported: settings are cached on first use
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("SWEEPER_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("GEMINI_API_KEY", "")

from datetime import datetime, timezone, timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from venue_platform.main import app
from venue_platform.db.base import Base, dumps_json
from venue_platform.db.session import get_db
from venue_platform.core.security import get_token_signer, hash_password
from venue_platform.models.appointment import Appointment
from venue_platform.models.user import User
from venue_platform.models.venue import Venue


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """Create tables on a per-test database, yield a session factory, then drop them."""
    url = os.getenv("TEST_DATABASE_URL") or f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    engine = create_async_engine(url, echo=False, poolclass=NullPool, json_serializer=dumps_json)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def create_user(
    db: AsyncSession,
    email: str,
    full_name: str = "Test User",
    password: str = "testpassword123",
    role: str = "user",
    is_active: bool = True,
) -> User:
    user = User(
        email=email,
        full_name=full_name,
        hashed_password=hash_password(password),
        role=role,
        is_active=is_active,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


def headers_for(user: User) -> dict:
    token = get_token_signer().create_access_token(subject=str(user.id))
    return {"Authorization": f"Bearer {token}"}


async def create_venue(db: AsyncSession, name: str = "Central Arena", is_active: bool = True) -> Venue:
    venue = Venue(
        name=name,
        description="Indoor arena with a full-size court",
        venue_type="sports",
        location="1 Stadium Road, Baku",
        capacity=500,
        amenities=["parking", "showers"],
        contact_phone="+994501234567",
        contact_email="arena@example.com",
        is_active=is_active,
    )
    db.add(venue)
    await db.commit()
    await db.refresh(venue)
    return venue


async def create_appointment(
    db: AsyncSession,
    user: User,
    venue: Venue,
    start: datetime,
    duration_hours: int = 1,
    status: str = "pending",
) -> Appointment:
    """Insert directly, skipping the future-date and conflict checks."""
    appointment = Appointment(
        user_id=user.id,
        user_name=user.full_name,
        venue_id=venue.id,
        venue_name=venue.name,
        appointment_date=start,
        duration_hours=duration_hours,
        purpose="Friendly match",
        status=status,
    )
    db.add(appointment)
    await db.commit()
    await db.refresh(appointment)
    return appointment


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, "test@example.com", full_name="Test User")


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, "other@example.com", full_name="Other User")


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, "admin@example.com", full_name="Admin User", role="admin")


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict:
    return headers_for(test_user)


@pytest_asyncio.fixture
async def other_headers(other_user: User) -> dict:
    return headers_for(other_user)


@pytest_asyncio.fixture
async def admin_headers(admin_user: User) -> dict:
    return headers_for(admin_user)


@pytest_asyncio.fixture
async def test_venue(db_session: AsyncSession) -> Venue:
    return await create_venue(db_session)


@pytest_asyncio.fixture
async def inactive_venue(db_session: AsyncSession) -> Venue:
    return await create_venue(db_session, name="Closed Hall", is_active=False)


@pytest.fixture
def future_start() -> datetime:
    """A start time safely in the future, on the hour."""
    return (datetime.now(timezone.utc) + timedelta(days=30)).replace(minute=0, second=0, microsecond=0)
