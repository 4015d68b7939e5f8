# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Persistence for login sessions."""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tpa_hr.exceptions import ConstraintViolation
from tpa_hr.models import UserSession

logger = logging.getLogger(__name__)


class SessionStore:
    """Keyed access to UserSession rows over a request-scoped DB session.

    Writes are flushed but not committed; the caller owns the transaction.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_active_by_token(self, token: str) -> UserSession | None:
        """Get an active session by exact token. Expiry is not checked."""
        return (
            self.db.query(UserSession)
            .filter(UserSession.token == token, UserSession.is_active.is_(True))
            .first()
        )

    def insert(self, session: UserSession) -> UserSession:
        """Add a new session.

        Raises:
            ConstraintViolation: if the token is already in use
        """
        try:
            # Savepoint: a collision undoes only this insert
            with self.db.begin_nested():
                self.db.add(session)
                self.db.flush()
        except IntegrityError as e:
            logger.warning("Session token collision on insert")
            raise ConstraintViolation(
                "Session token already exists", field="token"
            ) from e
        return session

    def deactivate(self, token: str) -> bool:
        """Mark the matching active session inactive.

        Returns:
            True if a session was updated
        """
        session = self.find_active_by_token(token)
        if session is None:
            return False
        session.is_active = False
        self.db.flush()
        return True

    def extend(self, session: UserSession, expires_at: datetime) -> UserSession:
        """Move the expiry of an active session."""
        session.expires_at = expires_at
        self.db.flush()
        return session
