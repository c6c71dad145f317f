"""
User API routes — signup, login, availability checks, Google login,
token refresh and the authenticated profile / password / logout calls.

Route prefix: /api/users
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from auth.dependencies import get_current_user, get_google_client, get_user_service
from auth.exceptions import DuplicateUserError, GoogleAccountConflictError, InactiveUserError
from auth.schemas import (
    ApiResponse,
    AvailabilityResponse,
    ChangePasswordRequest,
    GoogleLoginRequest,
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
    SignupRequest,
    SignupResponse,
    TokenBundle,
    UserInfo,
)
from auth.service import UserService
from auth.tokens import REFRESH, TokenClaims, create_access_token, create_refresh_token, decode_token
from config.settings import config
from connectors.google import GoogleOAuthClient
from database.models import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


def _respond(status_code: int, body: BaseModel) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def _login_payload(user: User, message: str) -> LoginResponse:
    return LoginResponse(
        success=True,
        message=message,
        user=UserInfo.from_user(user),
        data=TokenBundle(
            access_token=create_access_token(user),
            refresh_token=create_refresh_token(user.user_id),
            expires_in=config.access_token_expiry_seconds,
        ),
    )


# ── Public endpoints ───────────────────────────────────────────────────


@router.post("/signup", response_model=SignupResponse)
async def signup(
    req: SignupRequest,
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    """Register a new local account."""
    result = await service.signup(req)
    body = SignupResponse(success=result.success, message=result.message, user_id=result.user_id)
    code = status.HTTP_200_OK if result.success else status.HTTP_400_BAD_REQUEST
    return _respond(code, body)


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    """Login with user id + password and receive an access / refresh token pair."""
    user = await service.authenticate(req.user_id, req.password)
    if user is None:
        return _respond(
            status.HTTP_401_UNAUTHORIZED,
            LoginResponse(success=False, message="Invalid user ID or password."),
        )
    return _respond(status.HTTP_200_OK, _login_payload(user, "Login successful."))


@router.get("/check-id", response_model=AvailabilityResponse)
async def check_user_id(
    user_id: Optional[str] = Query(None, alias="userId"),
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    if not user_id or not user_id.strip():
        return _respond(
            status.HTTP_400_BAD_REQUEST,
            AvailabilityResponse(available=False, message="User ID is required."),
        )
    available = await service.is_user_id_available(user_id)
    message = "User ID is available." if available else "User ID is already in use."
    return _respond(status.HTTP_200_OK, AvailabilityResponse(available=available, message=message))


@router.get("/check-email", response_model=AvailabilityResponse)
async def check_email(
    email: Optional[str] = Query(None),
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    if not email or not email.strip():
        return _respond(
            status.HTTP_400_BAD_REQUEST,
            AvailabilityResponse(available=False, message="Email is required."),
        )
    available = await service.is_email_available(email)
    message = "Email is available." if available else "Email is already in use."
    return _respond(status.HTTP_200_OK, AvailabilityResponse(available=available, message=message))


@router.post("/auth/google", response_model=LoginResponse)
async def google_login(
    req: GoogleLoginRequest,
    service: UserService = Depends(get_user_service),
    google: GoogleOAuthClient = Depends(get_google_client),
) -> JSONResponse:
    """Exchange a Google OAuth access token for our own token pair."""
    if not req.access_token or not req.access_token.strip():
        return _respond(
            status.HTTP_400_BAD_REQUEST,
            ApiResponse.fail("Google access token is required."),
        )

    google_user = await google.verify_token(req.access_token)
    if google_user is None:
        return _respond(
            status.HTTP_400_BAD_REQUEST,
            ApiResponse.fail("Invalid Google access token."),
        )

    try:
        user = await service.google_login(google_user)
    except InactiveUserError as exc:
        logger.info("Google login refused for inactive account %s", exc.user_id)
        return _respond(status.HTTP_403_FORBIDDEN, ApiResponse.fail("Account is inactive."))
    except GoogleAccountConflictError:
        return _respond(
            status.HTTP_409_CONFLICT,
            ApiResponse.fail("Email is already linked to a different Google account."),
        )
    except DuplicateUserError as exc:
        logger.info("Google login could not create account: duplicate %s", exc.field)
        return _respond(status.HTTP_409_CONFLICT, ApiResponse.fail("User ID is already in use."))

    return _respond(status.HTTP_200_OK, _login_payload(user, "Google login successful."))


@router.post("/token/refresh", response_model=ApiResponse)
async def refresh_token(
    req: RefreshTokenRequest,
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    """Issue a fresh access token from a valid refresh token."""
    claims = decode_token(req.refresh_token, expected_type=REFRESH)
    user = await service.get_user_by_id(claims.user_id) if claims else None
    if user is None or not user.is_active:
        return _respond(
            status.HTTP_401_UNAUTHORIZED,
            ApiResponse.fail("Invalid or expired refresh token."),
        )

    bundle = TokenBundle(
        access_token=create_access_token(user),
        expires_in=config.access_token_expiry_seconds,
    )
    return _respond(
        status.HTTP_200_OK,
        ApiResponse.ok("Token refreshed.", bundle.model_dump(by_alias=True, exclude_none=True)),
    )


# ── Authenticated endpoints ────────────────────────────────────────────


@router.get("/profile", response_model=ApiResponse)
async def profile(
    user_id: Optional[str] = Query(None, alias="userId"),
    claims: TokenClaims = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    """Return the caller's profile, or another user's when ``userId`` is given."""
    target = user_id.strip() if user_id and user_id.strip() else claims.user_id
    user = await service.get_user_by_id(target)
    if user is None:
        return _respond(status.HTTP_404_NOT_FOUND, ApiResponse.fail("User not found."))

    info = UserInfo.from_user(user).model_dump(mode="json", by_alias=True, exclude_none=True)
    return _respond(status.HTTP_200_OK, ApiResponse.ok("Profile loaded.", info))


@router.post("/password", response_model=ApiResponse)
async def change_password(
    req: ChangePasswordRequest,
    claims: TokenClaims = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> JSONResponse:
    changed = await service.change_password(claims.user_id, req.old_password, req.new_password)
    if not changed:
        return _respond(
            status.HTTP_400_BAD_REQUEST,
            ApiResponse.fail(
                "Password change failed. Check the current password and the new password policy."
            ),
        )
    return _respond(status.HTTP_200_OK, ApiResponse.ok("Password changed."))


@router.post("/logout", response_model=ApiResponse)
async def logout(claims: TokenClaims = Depends(get_current_user)) -> JSONResponse:
    # Tokens are stateless; the client discards them.
    logger.info("Logout: %s", claims.user_id)
    return _respond(status.HTTP_200_OK, ApiResponse.ok("Logged out."))
