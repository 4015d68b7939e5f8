# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Services package."""
from tpa_hr.services import seed_service
from tpa_hr.services.auth_service import AuthFailure, AuthService, LoginResult
from tpa_hr.services.session_store import SessionStore
from tpa_hr.services.user_directory import UserDirectory

__all__ = [
    "AuthFailure",
    "AuthService",
    "LoginResult",
    "SessionStore",
    "UserDirectory",
    "seed_service",
]
