# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Enumeration types for database models."""

from enum import Enum

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator


class UserRole(str, Enum):
    """Role assigned to a user account.

    Stored values in older data are free-form ("SuperAdmin", "HR Admin",
    "Employee"). Lookup ignores case, spaces, underscores and hyphens, and
    anything unrecognised becomes UNKNOWN so a typo never raises.
    """

    SUPERADMIN = "superadmin"
    ADMIN = "admin"
    HRADMIN = "hradmin"
    HR = "hr"
    MANAGER = "manager"
    PROGRAMDIRECTOR = "programdirector"
    PROGRAMCOORDINATOR = "programcoordinator"
    EMPLOYEE = "employee"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "UserRole":
        if isinstance(value, str):
            normalized = "".join(
                ch for ch in value.lower() if ch not in " _-"
            )
            for member in cls:
                if member.value == normalized:
                    return member
        return cls.UNKNOWN

    @classmethod
    def parse(cls, value: str | None) -> "UserRole":
        """Parse a stored or user-supplied role name."""
        if value is None:
            return cls.UNKNOWN
        return cls(value)


class RoleType(TypeDecorator):
    """Persist UserRole as its string value in a VARCHAR column."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return UserRole.parse(value if isinstance(value, str) else str(value)).value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return UserRole.parse(value)
