"""
FastAPI dependencies for authentication.

Provides ``db_session``, ``get_user_service`` and ``get_current_user``
dependencies that are used across the user routes.  Protected routes
declare ``Depends(get_current_user)``; everything else stays public.
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.repository import UserRepository
from auth.service import UserService
from auth.tokens import ACCESS, TokenClaims, decode_token
from connectors.google import GoogleOAuthClient
from database.session import get_db_session

# auto_error=False so a missing header yields our 401 envelope, not a 403.
_bearer_scheme = HTTPBearer(auto_error=False)


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_user_service(session: AsyncSession = Depends(db_session)) -> UserService:
    return UserService(UserRepository(session))


def get_google_client() -> GoogleOAuthClient:
    return GoogleOAuthClient()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> TokenClaims:
    """
    Extract and verify the Bearer access token, returning its claims.

    Raises ``HTTPException(401)`` when the header is missing or the token
    is malformed, expired, or not an access token.
    """
    if credentials is None:
        raise _unauthorized("Authentication required.")

    claims = decode_token(credentials.credentials, expected_type=ACCESS)
    if claims is None:
        raise _unauthorized("Invalid or expired token.")
    return claims
