"""
database.py — async engine, declarative Base, and the per-request session.

Routes get a session through Depends(get_db); the transaction commits when
the route returns and rolls back if it raises. store.py only flushes.
Tests replace get_db with an in-memory SQLite session.
"""
from collections.abc import AsyncGenerator

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from taxcalc.config import settings

# JSONB on PostgreSQL, plain JSON on SQLite
JSONType = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Shared metadata for taxcalc.models; alembic/env.py targets Base.metadata."""


async_engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,  # amounts travel as bound params, not in the SQL text
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
