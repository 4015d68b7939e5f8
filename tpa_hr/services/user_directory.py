# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""User lookups and login bookkeeping."""

import uuid
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from tpa_hr.models import User


class UserDirectory:
    """Read and update user records for the authentication flow."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_active_by_email(self, email: str) -> User | None:
        """Get an active user by email, ignoring case."""
        return (
            self.db.query(User)
            .filter(
                func.lower(User.email) == email.strip().lower(),
                User.is_active.is_(True),
            )
            .first()
        )

    def get_by_email(self, email: str) -> User | None:
        """Get a user by email regardless of active state, ignoring case."""
        return (
            self.db.query(User)
            .filter(func.lower(User.email) == email.strip().lower())
            .first()
        )

    def get_by_id(self, user_id: uuid.UUID) -> User | None:
        """Get a user by ID."""
        return self.db.get(User, user_id)

    def record_failed_login(self, user: User, now: datetime) -> None:
        """Increment the failure counter in SQL so concurrent failures add up."""
        user.failed_login_attempts = User.failed_login_attempts + 1
        user.updated_at = now
        self.db.flush()

    def record_successful_login(self, user: User, now: datetime) -> None:
        """Clear the failure counter and stamp the login time."""
        user.failed_login_attempts = 0
        user.last_login = now
        user.updated_at = now
        self.db.flush()
