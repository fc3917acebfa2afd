"""
Test configuration for the tax calculator.

Environment defaults are set BEFORE taxcalc is imported so the settings
singleton picks them up: SQLite instead of PostgreSQL, a fixed signing key,
and a low PBKDF2 round count so register/login tests stay fast.

API tests get a fresh in-memory SQLite database per test, swapped in
through app.dependency_overrides[get_db]. No docker services needed.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-at-least-32-characters-long")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import taxcalc.models  # noqa: E402,F401  (registers tables on Base.metadata)
from taxcalc.database import Base, get_db  # noqa: E402
from taxcalc.main import app  # noqa: E402
from taxcalc.tests.demo_inputs import register_user  # noqa: E402


@pytest_asyncio.fixture
async def session_factory():
    """One in-memory database shared by every connection of a single test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(session_factory):
    """Async httpx client using ASGI transport — no live server needed."""

    async def _get_test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    return await register_user(client)
