# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, Query, Request, Response, status

from tpa_hr.api.deps import get_auth_service, get_current_user
from tpa_hr.models import User
from tpa_hr.schemas.auth import (
    AuthMessageResponse,
    LoginRequest,
    LoginResponse,
    RefreshResponse,
    TokenRequest,
    UserSummary,
    ValidateResponse,
)
from tpa_hr.services import AuthService

router = APIRouter()


def build_user_summary(user: User) -> UserSummary:
    """Build the public user view returned by the auth endpoints."""
    return UserSummary(id=str(user.id), email=user.email, role=user.role)


@router.post(
    "/login", response_model=LoginResponse, response_model_exclude_none=True
)
def login(
    data: LoginRequest,
    request: Request,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """Login with email and password."""
    if not (data.email and data.email.strip()) or not (
        data.password and data.password.strip()
    ):
        response.status_code = status.HTTP_400_BAD_REQUEST
        return LoginResponse(
            success=False, message="Email and password are required"
        )

    result = auth.login(
        data.email,
        data.password,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )

    if not result.success or result.user is None:
        response.status_code = status.HTTP_400_BAD_REQUEST
        return LoginResponse(success=False, message=result.message)

    return LoginResponse(
        success=True,
        message=result.message,
        token=result.token,
        expires_at=result.expires_at,
        user=build_user_summary(result.user),
    )


@router.post("/logout", response_model=AuthMessageResponse)
def logout(
    data: TokenRequest,
    auth: AuthService = Depends(get_auth_service),
) -> AuthMessageResponse:
    """Invalidate a session token. Always answers 200."""
    result = auth.logout(data.token or "")
    return AuthMessageResponse(
        success=result,
        message="Logout successful" if result else "Invalid token",
    )


@router.get(
    "/validate", response_model=ValidateResponse, response_model_exclude_none=True
)
def validate_token(
    response: Response,
    token: str | None = Query(default=None),
    auth: AuthService = Depends(get_auth_service),
) -> ValidateResponse:
    """Resolve a session token to its user."""
    user = auth.validate_token(token or "")
    if not user:
        response.status_code = status.HTTP_401_UNAUTHORIZED
        return ValidateResponse(success=False, message="Invalid or expired token")

    return ValidateResponse(success=True, user=build_user_summary(user))


@router.post(
    "/refresh", response_model=RefreshResponse, response_model_exclude_none=True
)
def refresh_session(
    data: TokenRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
) -> RefreshResponse:
    """Extend a valid session by a full validity window."""
    expires_at = auth.refresh_session(data.token or "")
    if expires_at is None:
        response.status_code = status.HTTP_401_UNAUTHORIZED
        return RefreshResponse(success=False, message="Invalid or expired token")

    return RefreshResponse(
        success=True, message="Session refreshed", expires_at=expires_at
    )


@router.get("/me", response_model=UserSummary)
def get_current_user_info(
    current_user: User = Depends(get_current_user),
) -> UserSummary:
    """Get current authenticated user."""
    return build_user_summary(current_user)
