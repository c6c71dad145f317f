"""
UserService — signup, login and account operations.

Orchestrates the validator, the password hasher and the repository.
Signup runs as a linear pipeline (validate → id check → email check →
strength check → hash → persist); the first failing stage decides the
message returned to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from auth.exceptions import DuplicateUserError, GoogleAccountConflictError, InactiveUserError
from auth.password import (
    hash_password,
    needs_rehash,
    password_strength,
    password_strength_label,
    verify_password,
)
from auth.repository import UserRepository
from auth.schemas import GoogleUser, SignupRequest
from auth.validators import validate_new_password, validate_signup
from config.settings import config
from database.models import User

logger = logging.getLogger(__name__)

MSG_SIGNUP_OK = "Signup completed."
MSG_USER_ID_TAKEN = "User ID is already in use."
MSG_EMAIL_TAKEN = "Email is already in use."

_GOOGLE_ID_PREFIX = "google_"
_USER_ID_MAX = 50
_NAME_MAX = 100


@dataclass
class SignupResult:
    success: bool
    message: str
    user_id: Optional[str] = None

    @classmethod
    def failure(cls, message: str) -> "SignupResult":
        return cls(success=False, message=message)


def weak_password_message(password: str) -> str:
    return (
        f"Password is too weak. (current: {password_strength_label(password)}, "
        f"required: Medium or stronger)"
    )


class UserService:
    def __init__(self, repository: UserRepository) -> None:
        self._repo = repository

    # ── Signup ─────────────────────────────────────────────────────────

    async def signup(self, request: Optional[SignupRequest]) -> SignupResult:
        errors = validate_signup(request)
        if errors:
            logger.info("Signup rejected by validation: %s", errors)
            return SignupResult.failure(", ".join(errors))

        if await self._repo.exists_by_user_id(request.user_id):
            logger.info("Signup rejected, user id taken: %s", request.user_id)
            return SignupResult.failure(MSG_USER_ID_TAKEN)

        if await self._repo.exists_by_email(request.email):
            logger.info("Signup rejected, email taken: %s", request.email)
            return SignupResult.failure(MSG_EMAIL_TAKEN)

        if password_strength(request.password) < config.min_password_strength:
            logger.info("Signup rejected, weak password for %s", request.user_id)
            return SignupResult.failure(weak_password_message(request.password))

        user = User(
            user_id=request.user_id,
            display_name=request.name.strip(),
            email=request.email,
            password_hash=hash_password(request.password),
            is_active=True,
        )
        try:
            await self._repo.save(user)
        except DuplicateUserError as exc:
            # Lost a race with a concurrent signup between the checks and the insert.
            return SignupResult.failure(MSG_EMAIL_TAKEN if exc.field == "email" else MSG_USER_ID_TAKEN)

        logger.info("Signup completed for %s", user.user_id)
        return SignupResult(success=True, message=MSG_SIGNUP_OK, user_id=user.user_id)

    # ── Login ──────────────────────────────────────────────────────────

    async def authenticate(self, user_id: Optional[str], password: Optional[str]) -> Optional[User]:
        """
        Return the user when *password* matches, else ``None``.

        Unknown ids, Google-only accounts, inactive accounts and wrong
        passwords all look the same to the caller.
        """
        if not user_id or not user_id.strip() or not password:
            return None

        user = await self._repo.find_by_user_id(user_id)
        if user is None:
            logger.info("Login failed for %s: unknown user", user_id)
            return None
        if not user.has_password:
            logger.info("Login failed for %s: no local password", user_id)
            return None
        if not user.is_active:
            logger.info("Login failed for %s: account inactive", user_id)
            return None
        if not verify_password(password, user.password_hash):
            logger.info("Login failed for %s: wrong password", user_id)
            return None

        if needs_rehash(user.password_hash):
            await self._repo.update_password(user, hash_password(password))
            logger.info("Upgraded password hash cost for %s", user_id)

        logger.info("Login succeeded for %s", user_id)
        return user

    async def login(self, user_id: Optional[str], password: Optional[str]) -> bool:
        return await self.authenticate(user_id, password) is not None

    async def change_password(
        self, user_id: str, old_password: Optional[str], new_password: Optional[str]
    ) -> bool:
        user = await self.authenticate(user_id, old_password)
        if user is None:
            return False
        if validate_new_password(new_password):
            logger.info("Password change rejected for %s: invalid new password", user_id)
            return False
        if password_strength(new_password) < config.min_password_strength:
            logger.info("Password change rejected for %s: weak new password", user_id)
            return False

        await self._repo.update_password(user, hash_password(new_password))
        logger.info("Password changed for %s", user_id)
        return True

    # ── Availability / lookups ─────────────────────────────────────────

    async def is_user_id_available(self, user_id: Optional[str]) -> bool:
        if not user_id or not user_id.strip():
            return False
        return not await self._repo.exists_by_user_id(user_id)

    async def is_email_available(self, email: Optional[str]) -> bool:
        if not email or not email.strip():
            return False
        return not await self._repo.exists_by_email(email)

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        return await self._repo.find_by_user_id(user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return await self._repo.find_by_email(email)

    async def get_user_count(self) -> int:
        return await self._repo.count()

    # ── Google ─────────────────────────────────────────────────────────

    async def google_login(self, google_user: GoogleUser) -> User:
        """
        Resolve a verified Google profile to a local account.

        Lookup order: Google id, then email (linking the Google id to the
        existing account), then a new Google-only account.

        Raises ``GoogleAccountConflictError`` when the email's account is
        already linked to a different Google id, and ``DuplicateUserError``
        when the generated user id is taken by another account.
        """
        user = await self._repo.find_by_google_id(google_user.id)

        if user is None:
            user = await self._repo.find_by_email(google_user.email)
            if user is not None and user.google_id and user.google_id != google_user.id:
                logger.warning("Refusing to relink %s to a different Google account", user.user_id)
                raise GoogleAccountConflictError(user.user_id)
            if user is not None:
                await self._repo.link_google_id(user, google_user.id)
                logger.info("Linked Google account to existing user %s", user.user_id)

        if user is None:
            user_id = (_GOOGLE_ID_PREFIX + google_user.id)[:_USER_ID_MAX]
            if await self._repo.exists_by_user_id(user_id):
                logger.warning("Generated Google user id %s is already taken", user_id)
                raise DuplicateUserError("user_id", user_id)

            name = (google_user.name or "").strip() or google_user.email.split("@")[0]
            user = User(
                user_id=user_id,
                display_name=name[:_NAME_MAX],
                email=google_user.email,
                google_id=google_user.id,
                password_hash=None,
                is_active=True,
            )
            await self._repo.save(user)
            logger.info("Created Google account %s", user.user_id)

        if not user.is_active:
            raise InactiveUserError(user.user_id)
        return user
