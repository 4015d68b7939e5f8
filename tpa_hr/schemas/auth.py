# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Authentication schemas."""
import datetime
from typing import Optional

from pydantic import BaseModel, Field

from tpa_hr.models.enums import UserRole


class LoginRequest(BaseModel):
    """Login credentials.

    Both fields are optional so a missing or null field is reported by the
    endpoint as a 400 rather than a validation error.
    """

    email: Optional[str] = None
    password: Optional[str] = None


class TokenRequest(BaseModel):
    """Request carrying a session token (logout, refresh)."""

    token: Optional[str] = None


class UserSummary(BaseModel):
    """Public view of the authenticated user."""

    id: str
    email: str
    role: UserRole


class AuthMessageResponse(BaseModel):
    """Success flag with a human readable message."""

    success: bool
    message: str


class LoginResponse(AuthMessageResponse):
    """Schema for login response."""

    token: Optional[str] = None
    expires_at: Optional[datetime.datetime] = Field(
        None, serialization_alias="expiresAt"
    )
    user: Optional[UserSummary] = None


class ValidateResponse(BaseModel):
    """Schema for token validation response."""

    success: bool
    message: Optional[str] = None
    user: Optional[UserSummary] = None


class RefreshResponse(AuthMessageResponse):
    """Schema for session refresh response."""

    expires_at: Optional[datetime.datetime] = Field(
        None, serialization_alias="expiresAt"
    )
