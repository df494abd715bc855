"""Shared test configuration and fixtures.

Each test gets a fresh SQLite database file (via ``aiosqlite``) with all
tables created, and a single ``AsyncSession`` shared by the fixtures and
the API under test.
"""

import os
import uuid
from collections.abc import AsyncGenerator
from datetime import date

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_cabins.db")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from cabin_rentals.auth.jwt import create_token_pair
from cabin_rentals.auth.passwords import hash_password
from cabin_rentals.database import Base, build_engine, get_db
from cabin_rentals.main import app
from cabin_rentals.models import Cabin, Reservation, User
from cabin_rentals.pricing import Tariffs

TARIFFS = Tariffs(weekday=150000, weekend=180000, holiday=200000)


# ---------------------------------------------------------------------------
# Per-test database
# ---------------------------------------------------------------------------


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest_asyncio.fixture
async def test_engine(db_url: str):
    """Engine bound to a fresh database with every table created."""
    engine = build_engine(db_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session = AsyncSession(bind=test_engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to use the test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Users and auth headers
# ---------------------------------------------------------------------------


async def _make_user(db_session: AsyncSession, role: str, is_active: bool = True) -> User:
    unique = uuid.uuid4().hex[:8]
    user = User(
        email=f"{role}-{unique}@test.com",
        hashed_password=hash_password("testpass123"),
        name=f"Test {role.title()}",
        role=role,
        is_active=is_active,
    )
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


def _headers_for(user: User) -> dict[str, str]:
    tokens = create_token_pair(str(user.id), user.role)
    return {"Authorization": f"Bearer {tokens['access_token']}"}


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await _make_user(db_session, "admin")


@pytest_asyncio.fixture
async def admin_headers(admin_user: User) -> dict[str, str]:
    return _headers_for(admin_user)


@pytest_asyncio.fixture
async def regular_user(db_session: AsyncSession) -> User:
    return await _make_user(db_session, "user")


@pytest_asyncio.fixture
async def user_headers(regular_user: User) -> dict[str, str]:
    return _headers_for(regular_user)


# ---------------------------------------------------------------------------
# Cabins and reservations
# ---------------------------------------------------------------------------


async def make_cabin(db_session: AsyncSession, name: str = "Cabaña del Lago", capacity: int = 4, **extra) -> Cabin:
    cabin = Cabin(name=name, description="Test cabin", capacity=capacity, base_price=150000, **extra)
    db_session.add(cabin)
    await db_session.flush()
    await db_session.refresh(cabin)
    return cabin


async def make_reservation(
    db_session: AsyncSession,
    cabin: Cabin,
    start: date,
    end: date,
    status: str = "confirmed",
) -> Reservation:
    """Insert a reservation row directly, bypassing the booking checks."""
    reservation = Reservation(
        cabin_id=cabin.id,
        start_date=start,
        end_date=end,
        status=status,
        total_price=0,
        guest_first_name="Ana",
        guest_last_name="García",
        guest_document="30123456",
    )
    db_session.add(reservation)
    await db_session.flush()
    await db_session.refresh(reservation)
    return reservation


@pytest_asyncio.fixture
async def test_cabin(db_session: AsyncSession) -> Cabin:
    return await make_cabin(db_session)


@pytest.fixture
def guest_payload() -> dict:
    return {
        "first_name": "Lucía",
        "last_name": "Fernández",
        "document": "30111222",
        "phone": "+5492944000001",
        "email": "lucia@example.com",
    }
