"""
models/tax_calculation.py — SQLAlchemy ORM model for stored tax calculations.

Table: tax_calculations
Many-to-one with users. Rows are written once and never updated — the
history endpoint reads them back newest first.

Input scalars get their own columns; the deduction/investment mappings and
the computed TaxResult are kept as JSON blobs exactly as the caller saw them.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from taxcalc.database import Base, JSONType


class TaxCalculationORM(Base):
    __tablename__ = "tax_calculations"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owner — history is always filtered by this column",
    )
    financial_year: Mapped[str] = mapped_column(String(7), nullable=False)
    age_group: Mapped[str] = mapped_column(
        String(8),
        nullable=False,
        comment="'below-60', '60-80' or 'above-80' — mirrors AgeGroup enum",
    )
    regime: Mapped[str] = mapped_column(
        String(3),
        nullable=False,
        comment="'old' or 'new' — mirrors Regime enum",
    )
    income: Mapped[float] = mapped_column(Float, nullable=False)
    hra_exempt: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    deductions: Mapped[dict] = mapped_column(JSONType, nullable=False)
    investments: Mapped[dict] = mapped_column(JSONType, nullable=False)
    result: Mapped[dict] = mapped_column(
        JSONType,
        nullable=False,
        comment="TaxResult serialized with camelCase keys",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )
