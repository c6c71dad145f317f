"""
Data access for the ``users`` table.

``UserRepository`` wraps one request-scoped ``AsyncSession``.  Lookups and
writes raise ``RepositoryError`` when the database misbehaves; the
admin helpers (``count``, ``find_all``, ``delete_*``) log and degrade
instead.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.exceptions import DuplicateUserError, RepositoryError
from database.models import User

logger = logging.getLogger(__name__)


def _require(value: Optional[str], name: str) -> None:
    if value is None or not value.strip():
        raise ValueError(f"{name} must not be empty")


def _duplicate_field(exc: IntegrityError) -> str:
    text = str(exc.orig).lower()
    if "email" in text:
        return "email"
    if "google_id" in text:
        return "google_id"
    return "user_id"


class UserRepository:
    """CRUD over :class:`~database.models.User`."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    # ── Writes ─────────────────────────────────────────────────────────

    async def save(self, user: User) -> User:
        """Insert *user* and flush so constraint violations surface here."""
        if user is None:
            raise ValueError("user must not be None")
        _require(user.user_id, "user_id")
        _require(user.email, "email")

        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            field = _duplicate_field(exc)
            value = user.email if field == "email" else (
                user.google_id if field == "google_id" else user.user_id
            )
            logger.warning("Duplicate %s on insert: %s", field, value)
            raise DuplicateUserError(field, value) from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.error("Failed to save user %s: %s", user.user_id, exc)
            raise RepositoryError(f"Failed to save user {user.user_id}") from exc

        logger.info("Saved user %s", user.user_id)
        return user

    async def update_password(self, user: User, password_hash: str) -> None:
        user.password_hash = password_hash
        await self._flush(f"update password for {user.user_id}")

    async def link_google_id(self, user: User, google_id: str) -> None:
        _require(google_id, "google_id")
        user.google_id = google_id
        await self._flush(f"link Google account to {user.user_id}")

    async def _flush(self, action: str) -> None:
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.error("Failed to %s: %s", action, exc)
            raise RepositoryError(f"Failed to {action}") from exc

    # ── Lookups ────────────────────────────────────────────────────────

    async def find_by_user_id(self, user_id: str) -> Optional[User]:
        _require(user_id, "user_id")
        return await self._first(select(User).where(User.user_id == user_id))

    async def find_by_email(self, email: str) -> Optional[User]:
        _require(email, "email")
        return await self._first(select(User).where(User.email == email))

    async def find_by_google_id(self, google_id: str) -> Optional[User]:
        _require(google_id, "google_id")
        return await self._first(select(User).where(User.google_id == google_id))

    async def exists_by_user_id(self, user_id: str) -> bool:
        return await self.find_by_user_id(user_id) is not None

    async def exists_by_email(self, email: str) -> bool:
        return await self.find_by_email(email) is not None

    async def _first(self, stmt) -> Optional[User]:
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            logger.error("User lookup failed: %s", exc)
            raise RepositoryError("User lookup failed") from exc
        return result.scalar_one_or_none()

    # ── Admin / maintenance ────────────────────────────────────────────

    async def count(self) -> int:
        try:
            result = await self._session.execute(select(func.count()).select_from(User))
        except SQLAlchemyError as exc:
            logger.error("Failed to count users: %s", exc)
            return 0
        return int(result.scalar_one())

    async def find_all(self) -> List[User]:
        try:
            result = await self._session.execute(select(User).order_by(User.created_at))
        except SQLAlchemyError as exc:
            logger.error("Failed to list users: %s", exc)
            return []
        return list(result.scalars().all())

    async def delete_by_user_id(self, user_id: str) -> bool:
        _require(user_id, "user_id")
        try:
            result = await self._session.execute(delete(User).where(User.user_id == user_id))
            await self._session.flush()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.error("Failed to delete user %s: %s", user_id, exc)
            return False
        deleted = result.rowcount > 0
        if deleted:
            logger.info("Deleted user %s", user_id)
        return deleted

    async def delete_all(self) -> None:
        try:
            result = await self._session.execute(delete(User))
            await self._session.flush()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.error("Failed to delete all users: %s", exc)
            return
        logger.warning("Deleted all users (%d rows)", result.rowcount)
