# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Database models package."""

from tpa_hr.models.base import Base, TimestampMixin, utc_now
from tpa_hr.models.enums import UserRole
from tpa_hr.models.session import UserSession
from tpa_hr.models.user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "UserRole",
    "UserSession",
    "utc_now",
]
