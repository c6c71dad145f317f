"""
GoogleOAuthClient — resolves a Google OAuth access token to a profile.

The browser performs the OAuth consent flow and hands us the resulting
access token; we only ask Google's userinfo endpoint who it belongs to.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from auth.schemas import GoogleUser
from config.settings import config

logger = logging.getLogger(__name__)

_USERINFO_FIELDS = "id,email,name"


class GoogleOAuthClient:
    """Thin async wrapper around the Google userinfo endpoint."""

    def __init__(
        self,
        userinfo_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._userinfo_url = userinfo_url or config.google_userinfo_url
        self._timeout = timeout if timeout is not None else config.google_timeout_seconds
        self._transport = transport

    async def verify_token(self, access_token: str) -> Optional[GoogleUser]:
        """
        Return the Google profile for *access_token*, or ``None`` when Google
        rejects it or cannot be reached.
        """
        if access_token is None or not access_token.strip():
            raise ValueError("Google access token must not be empty")

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.get(
                    self._userinfo_url,
                    params={"fields": _USERINFO_FIELDS},
                    headers={"Authorization": f"Bearer {access_token}"},
                )
        except httpx.HTTPError as exc:
            logger.error("Google userinfo request failed: %s", exc)
            return None

        if resp.status_code != 200:
            logger.warning("Google rejected access token (HTTP %d)", resp.status_code)
            return None

        try:
            payload = resp.json()
            user = GoogleUser.model_validate(payload)
        except (ValueError, ValidationError) as exc:
            logger.warning("Unexpected Google userinfo payload: %s", exc)
            return None

        if not user.id or not user.email:
            logger.warning("Google userinfo payload lacks id or email")
            return None

        logger.info("Verified Google account %s", user.email)
        return user
