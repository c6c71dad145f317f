"""
JWT creation and verification.

Tokens are HS256-signed JWTs (PyJWT).  Secret key is loaded from
``config.jwt_secret_key`` (env var: ``JWT_SECRET_KEY``).

Access tokens carry ``sub`` / ``name`` / ``email`` and expire after
``ACCESS_TOKEN_EXPIRY_SECONDS``; refresh tokens carry only ``sub`` and
live for ``REFRESH_TOKEN_EXPIRY_SECONDS``.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import jwt

from config.settings import config

logger = logging.getLogger(__name__)

ACCESS = "access"
REFRESH = "refresh"


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    token_type: str
    expires_at: int
    name: Optional[str] = None
    email: Optional[str] = None


def _encode(payload: Dict[str, Any], lifetime: int) -> str:
    now = int(time.time())
    payload.update({"iss": config.jwt_issuer, "iat": now, "exp": now + lifetime})
    return jwt.encode(payload, config.jwt_secret_key, algorithm=config.jwt_algorithm)


def create_access_token(user: Any) -> str:
    """Create a short-lived access token for *user* (a ``User`` row)."""
    return _encode(
        {
            "sub": user.user_id,
            "name": user.display_name,
            "email": user.email,
            "type": ACCESS,
        },
        config.access_token_expiry_seconds,
    )


def create_refresh_token(user_id: str) -> str:
    return _encode({"sub": user_id, "type": REFRESH}, config.refresh_token_expiry_seconds)


def decode_token(token: Optional[str], expected_type: str = ACCESS) -> Optional[TokenClaims]:
    """
    Verify *token* and return its claims.

    Returns ``None`` for anything that is not a valid, unexpired token of
    ``expected_type`` issued by this service.
    """
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            config.jwt_secret_key,
            algorithms=[config.jwt_algorithm],
            issuer=config.jwt_issuer,
            options={"require": ["sub", "exp", "iss"]},
        )
    except jwt.ExpiredSignatureError:
        logger.debug("Rejected expired %s token", expected_type)
        return None
    except jwt.InvalidTokenError as exc:
        logger.debug("Rejected invalid token: %s", exc)
        return None

    if payload.get("type") != expected_type:
        logger.debug("Rejected token of type %r (wanted %r)", payload.get("type"), expected_type)
        return None

    return TokenClaims(
        user_id=payload["sub"],
        token_type=payload["type"],
        expires_at=int(payload["exp"]),
        name=payload.get("name"),
        email=payload.get("email"),
    )
