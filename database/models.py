"""
SQLAlchemy ORM models for the PlanP ``users`` table.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    user_id = Column(String(50), primary_key=True)
    display_name = Column("username", String(100), nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)   # NULL for Google-only accounts
    email = Column(String(255), unique=True, nullable=False, index=True)
    google_id = Column(String(64), unique=True, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)

    def __repr__(self) -> str:
        return (
            f"<User(user_id={self.user_id!r}, name={self.display_name!r}, "
            f"email={self.email!r}, active={self.is_active})>"
        )
