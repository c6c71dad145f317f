"""
Request / response payloads for the user API.

JSON on the wire is camelCase (``userId``, ``accessToken``); Python code
uses the snake_case attribute names.
"""

from __future__ import annotations

import time
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _now_millis() -> int:
    return int(time.time() * 1000)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Requests ───────────────────────────────────────────────────────────
# Fields are optional on purpose: the signup validator reports missing
# values as messages instead of a 422.


class SignupRequest(_CamelModel):
    user_id: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None

    def __repr__(self) -> str:
        return f"SignupRequest(user_id={self.user_id!r}, name={self.name!r}, email={self.email!r})"


class LoginRequest(_CamelModel):
    user_id: Optional[str] = None
    password: Optional[str] = None

    def __repr__(self) -> str:
        return f"LoginRequest(user_id={self.user_id!r})"


class GoogleLoginRequest(_CamelModel):
    access_token: Optional[str] = None


class RefreshTokenRequest(_CamelModel):
    refresh_token: Optional[str] = None


class ChangePasswordRequest(_CamelModel):
    old_password: Optional[str] = None
    new_password: Optional[str] = None


# ── Responses ──────────────────────────────────────────────────────────


class UserInfo(_CamelModel):
    user_id: str
    name: str
    email: str
    active: bool = True
    google_linked: bool = False
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: Any) -> "UserInfo":
        return cls(
            user_id=user.user_id,
            name=user.display_name,
            email=user.email,
            active=bool(user.is_active),
            google_linked=user.google_id is not None,
            created_at=user.created_at,
        )


class TokenBundle(_CamelModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "Bearer"
    expires_in: int


class ApiResponse(_CamelModel):
    """Uniform ``{success, message, data?, timestamp}`` envelope."""

    success: bool
    message: str
    data: Optional[Any] = None
    timestamp: int = Field(default_factory=_now_millis)

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "ApiResponse":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, data: Any = None) -> "ApiResponse":
        return cls(success=False, message=message, data=data)


class SignupResponse(ApiResponse):
    user_id: Optional[str] = None


class LoginResponse(ApiResponse):
    user: Optional[UserInfo] = None
    data: Optional[TokenBundle] = None


class AvailabilityResponse(_CamelModel):
    available: bool
    message: str


class HealthResponse(_CamelModel):
    status: str
    timestamp: str
    uptime: str
    service: str
    version: str


class GoogleUser(BaseModel):
    """Profile returned by Google's userinfo endpoint."""

    id: str
    email: str
    name: Optional[str] = None
