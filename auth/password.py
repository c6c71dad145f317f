"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.  Also scores password strength
for the signup policy.
"""

from __future__ import annotations

import re
from typing import Optional

import bcrypt

from config.settings import config

_BCRYPT_HASH_RE = re.compile(r"^\$2[abxy]\$\d{2}\$.{53}$")

_LOWER_RE = re.compile(r"[a-z]")
_UPPER_RE = re.compile(r"[A-Z]")
_DIGIT_RE = re.compile(r"\d")
_SPECIAL_RE = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")

MIN_ROUNDS = 4
MAX_ROUNDS = 31
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt (auto-salted, work factor 12 unless overridden)."""
    if password is None or not password.strip():
        raise ValueError("Password must not be empty")
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    rounds = config.bcrypt_rounds if rounds is None else rounds
    if not MIN_ROUNDS <= rounds <= MAX_ROUNDS:
        raise ValueError(f"bcrypt rounds must be between {MIN_ROUNDS} and {MAX_ROUNDS}")
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: Optional[str], password_hash: Optional[str]) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    if password is None or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False


def is_valid_hash(password_hash: Optional[str]) -> bool:
    """Structural check of a ``$2b$12$…`` bcrypt string (does not verify anything)."""
    return bool(password_hash) and _BCRYPT_HASH_RE.fullmatch(password_hash) is not None


def get_rounds(password_hash: Optional[str]) -> int:
    """Return the cost factor encoded in *password_hash*, or -1 if it is not a bcrypt hash."""
    if not is_valid_hash(password_hash):
        return -1
    return int(password_hash.split("$")[2])


def needs_rehash(password_hash: Optional[str]) -> bool:
    """True when a stored hash was produced with fewer rounds than currently configured."""
    rounds = get_rounds(password_hash)
    return 0 < rounds < config.bcrypt_rounds


def password_strength(password: Optional[str]) -> int:
    """
    Score a password from 0 to 100.

    Length is worth up to 25 points, each character class (lowercase,
    uppercase, digit, special) 15 points, and mixing classes adds a
    bonus of 5 (two classes) or 10 (three or more).
    """
    if not password:
        return 0

    score = 0
    length = len(password)
    if length >= 12:
        score += 25
    elif length >= 8:
        score += 20
    elif length >= 6:
        score += 15
    elif length >= 4:
        score += 5

    classes = sum(
        1 for pattern in (_LOWER_RE, _UPPER_RE, _DIGIT_RE, _SPECIAL_RE)
        if pattern.search(password)
    )
    score += 15 * classes

    if classes >= 3:
        score += 10
    elif classes == 2:
        score += 5

    return min(score, 100)


def password_strength_label(password: Optional[str]) -> str:
    """Human-readable band for :func:`password_strength`."""
    score = password_strength(password)
    if score >= 80:
        return "Very strong"
    if score >= 60:
        return "Strong"
    if score >= 40:
        return "Medium"
    if score >= 20:
        return "Weak"
    return "Very weak"
