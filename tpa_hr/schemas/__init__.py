# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Pydantic schemas package."""
from tpa_hr.schemas.auth import (
    AuthMessageResponse,
    LoginRequest,
    LoginResponse,
    RefreshResponse,
    TokenRequest,
    UserSummary,
    ValidateResponse,
)
from tpa_hr.schemas.common import HealthResponse

__all__ = [
    "AuthMessageResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "RefreshResponse",
    "TokenRequest",
    "UserSummary",
    "ValidateResponse",
]
