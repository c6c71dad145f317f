"""
Domain exceptions raised by the auth layer and mapped to HTTP responses
in ``api.errors``.
"""

from __future__ import annotations


class AuthError(Exception):
    """Base class for all auth-layer errors."""


class RepositoryError(AuthError):
    """A database operation failed (connectivity, SQL error, …)."""


class DuplicateUserError(RepositoryError):
    """Insert rejected by a uniqueness constraint (user_id / email / google_id)."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"Duplicate {field}: {value}")
        self.field = field
        self.value = value


class InactiveUserError(AuthError):
    """The account exists but has been deactivated."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User account is inactive: {user_id}")
        self.user_id = user_id


class GoogleAccountConflictError(AuthError):
    """The email belongs to an account already linked to another Google id."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User {user_id} is linked to a different Google account")
        self.user_id = user_id
