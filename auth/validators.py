"""
Signup input validation.

Pure functions: every check appends a human-readable message to a list
and nothing raises.  An empty list means the input is valid.
"""

from __future__ import annotations

import re
from typing import List, Optional

from auth.schemas import SignupRequest

USER_ID_RE = re.compile(r"^[a-zA-Z0-9_]{3,20}$")
EMAIL_RE = re.compile(r"^[A-Za-z0-9+_.-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})$")

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 50
PASSWORD_MAX_BYTES = 72   # bcrypt input limit
NAME_MAX_LENGTH = 50


def validate_signup(request: Optional[SignupRequest]) -> List[str]:
    """Validate every signup field and return the collected error messages."""
    if request is None:
        return ["Request data is missing."]

    errors: List[str] = []
    _check_user_id(request.user_id, errors)
    _check_password(request.password, errors)
    _check_name(request.name, errors)
    _check_email(request.email, errors)
    return errors


def validate_new_password(password: Optional[str]) -> List[str]:
    errors: List[str] = []
    _check_password(password, errors)
    return errors


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email) and EMAIL_RE.fullmatch(email) is not None


def _check_user_id(user_id: Optional[str], errors: List[str]) -> None:
    if not user_id or not user_id.strip():
        errors.append("User ID is required.")
    elif not USER_ID_RE.fullmatch(user_id):
        errors.append("User ID must be 3-20 characters of letters, digits or underscores.")


def _check_password(password: Optional[str], errors: List[str]) -> None:
    if not password:
        errors.append("Password is required.")
    elif len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters.")
    elif len(password) > PASSWORD_MAX_LENGTH:
        errors.append(f"Password must be at most {PASSWORD_MAX_LENGTH} characters.")
    elif len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        errors.append(f"Password must be at most {PASSWORD_MAX_BYTES} bytes.")


def _check_name(name: Optional[str], errors: List[str]) -> None:
    if not name or not name.strip():
        errors.append("Name is required.")
    elif len(name) > NAME_MAX_LENGTH:
        errors.append(f"Name must be at most {NAME_MAX_LENGTH} characters.")


def _check_email(email: Optional[str], errors: List[str]) -> None:
    if not email or not email.strip():
        errors.append("Email is required.")
    elif not is_valid_email(email):
        errors.append("Email format is invalid.")
