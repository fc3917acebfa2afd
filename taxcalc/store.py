"""
store.py — Data access facade for the tax calculator.

All routes use these functions — no route touches SQLAlchemy directly.

Design principles:
  - All functions are async and accept an AsyncSession parameter
  - No raw SQL: ORM-only queries
  - flush() not commit() — the get_db() dependency owns the transaction
  - Logs only ids and regime — never income figures, emails or password hashes
  - Returns Pydantic objects (not ORM instances) so callers are persistence-agnostic
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taxcalc.auth.schemas import UserOut
from taxcalc.models.tax_calculation import TaxCalculationORM
from taxcalc.models.user import UserORM
from taxcalc.tax_engine.schemas import CalculationRecord, TaxInput, TaxResult

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 10


def _as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes, PostgreSQL aware ones. Stored values are UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _user_out(orm: UserORM) -> UserOut:
    return UserOut(
        id=orm.id,
        name=orm.name,
        email=orm.email,
        created_at=_as_utc(orm.created_at),
    )


# ---------------------------------------------------------------------------
# User operations
# ---------------------------------------------------------------------------

async def create_user(
    db: AsyncSession,
    name: str,
    email: str,
    password_hash: str,
) -> UserOut:
    """
    Insert a new user. Caller checks get_user_credentials() first; the unique
    index on email still rejects a concurrent duplicate with IntegrityError.
    """
    orm = UserORM(name=name, email=email, password_hash=password_hash)
    db.add(orm)
    await db.flush()
    logger.info("Created user user_id=%s", orm.id)
    return _user_out(orm)


async def get_user_credentials(
    db: AsyncSession,
    email: str,
) -> Optional[tuple[str, str]]:
    """
    Return (user_id, password_hash) for email, or None if no such user.
    Kept separate from get_user() so the hash never leaves the login path.
    """
    result = await db.execute(
        select(UserORM.id, UserORM.password_hash).where(UserORM.email == email)
    )
    row = result.one_or_none()
    if row is None:
        return None
    return row.id, row.password_hash


async def get_user(
    db: AsyncSession,
    user_id: str,
) -> Optional[UserOut]:
    """Returns None if the user does not exist (caller raises 404)."""
    result = await db.execute(select(UserORM).where(UserORM.id == user_id))
    orm = result.scalar_one_or_none()
    if orm is None:
        return None
    return _user_out(orm)


# ---------------------------------------------------------------------------
# Calculation operations
# ---------------------------------------------------------------------------

async def save_calculation(
    db: AsyncSession,
    user_id: str,
    tax_input: TaxInput,
    result: TaxResult,
) -> str:
    """
    Persist one calculation (inputs + result) for user_id.
    Records are append-only — there is no update path.
    Returns the new calculation id.
    """
    orm = TaxCalculationORM(
        user_id=user_id,
        financial_year=tax_input.financial_year,
        age_group=tax_input.age_group.value,
        regime=tax_input.regime.value,
        income=tax_input.income,
        hra_exempt=tax_input.hra_exempt,
        deductions=tax_input.deductions.model_dump(mode="json", by_alias=True),
        investments=tax_input.investments.model_dump(mode="json", by_alias=True),
        result=result.model_dump(mode="json", by_alias=True),
    )
    db.add(orm)
    await db.flush()
    logger.info(
        "Saved calculation calculation_id=%s user_id=%s regime=%s",
        orm.id,
        user_id,
        orm.regime,
    )
    return orm.id


async def get_calculation_history(
    db: AsyncSession,
    user_id: str,
    limit: int = HISTORY_LIMIT,
) -> list[CalculationRecord]:
    """
    The caller's most recent calculations, newest first, at most `limit`.
    Returns an empty list if the user has none.
    """
    result = await db.execute(
        select(TaxCalculationORM)
        .where(TaxCalculationORM.user_id == user_id)
        .order_by(TaxCalculationORM.created_at.desc())
        .limit(limit)
    )
    rows = result.scalars().all()
    return [
        CalculationRecord(
            id=row.id,
            financial_year=row.financial_year,
            age_group=row.age_group,
            regime=row.regime,
            income=row.income,
            hra_exempt=row.hra_exempt,
            deductions=row.deductions,
            investments=row.investments,
            result=row.result,
            created_at=_as_utc(row.created_at),
        )
        for row in rows
    ]
