"""
models/user.py — SQLAlchemy ORM model for registered users.

Table: users
Email is unique and indexed (login lookup). Only the PBKDF2 hash of the
password is stored, never the password itself.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from taxcalc.database import Base


class UserORM(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        index=True,
        comment="Lower-cased on write so lookups are case-insensitive",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="pbkdf2_sha256$iterations$salt_b64$hash_b64",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
