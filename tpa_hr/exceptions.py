# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Exception types raised by the stores and services."""


class AuthError(Exception):
    """Base class for authentication backend errors."""


class ConstraintViolation(AuthError):
    """A write was rejected by a uniqueness constraint."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class PersistenceFailure(AuthError):
    """The storage layer could not complete an operation."""
