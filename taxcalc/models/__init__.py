"""
models/__init__.py — imports all ORM models so Alembic's env.py
sees them via Base.metadata when generating migrations.

Import order matters: tax_calculations has a FK to users.
"""
from taxcalc.models.user import UserORM
from taxcalc.models.tax_calculation import TaxCalculationORM

__all__ = ["UserORM", "TaxCalculationORM"]
