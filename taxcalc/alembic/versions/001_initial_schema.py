"""initial_schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000 UTC

Creates the two core tables:
  - users             (credentials; email unique)
  - tax_calculations  (append-only calculation history, FK → users)
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_JSON = sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), "postgresql")


def upgrade() -> None:
    # --- users table ---
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False, comment="Lower-cased on write so lookups are case-insensitive"),
        sa.Column("password_hash", sa.String(length=255), nullable=False, comment="pbkdf2_sha256$iterations$salt_b64$hash_b64"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    # --- tax_calculations table ---
    op.create_table(
        "tax_calculations",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False, comment="Owner — history is always filtered by this column"),
        sa.Column("financial_year", sa.String(length=7), nullable=False),
        sa.Column("age_group", sa.String(length=8), nullable=False, comment="'below-60', '60-80' or 'above-80' — mirrors AgeGroup enum"),
        sa.Column("regime", sa.String(length=3), nullable=False, comment="'old' or 'new' — mirrors Regime enum"),
        sa.Column("income", sa.Float(), nullable=False),
        sa.Column("hra_exempt", sa.Float(), nullable=False),
        sa.Column("deductions", _JSON, nullable=False),
        sa.Column("investments", _JSON, nullable=False),
        sa.Column("result", _JSON, nullable=False, comment="TaxResult serialized with camelCase keys"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_tax_calculations_user_id"), "tax_calculations", ["user_id"], unique=False)
    op.create_index(op.f("ix_tax_calculations_created_at"), "tax_calculations", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_tax_calculations_created_at"), table_name="tax_calculations")
    op.drop_index(op.f("ix_tax_calculations_user_id"), table_name="tax_calculations")
    op.drop_table("tax_calculations")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
