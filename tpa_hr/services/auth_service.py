# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Authentication service.

Login, logout and token validation on top of the user directory and the
session store. Expected failures come back as a LoginResult; only storage
errors are caught here, logged, and turned into a generic failure.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tpa_hr.config import settings
from tpa_hr.exceptions import ConstraintViolation, PersistenceFailure
from tpa_hr.models import User, UserSession, utc_now
from tpa_hr.security import generate_salt, generate_session_token, verify_password
from tpa_hr.services.session_store import SessionStore
from tpa_hr.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
ACCOUNT_LOCKED_MESSAGE = "Account is locked due to too many failed attempts"
LOGIN_ERROR_MESSAGE = "An error occurred during login"
LOGIN_SUCCESS_MESSAGE = "Login successful"

MAX_TOKEN_ATTEMPTS = 3

# Unknown emails are checked against this so they cost the same as a real one
DUMMY_SALT = generate_salt()


class AuthFailure(str, Enum):
    """Why a login was refused."""

    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_LOCKED = "account_locked"
    PERSISTENCE_FAILURE = "persistence_failure"


@dataclass
class LoginResult:
    """Outcome of a login attempt."""

    success: bool
    message: str
    user: User | None = None
    token: str | None = None
    expires_at: datetime | None = None
    failure: AuthFailure | None = None

    @classmethod
    def failed(cls, failure: AuthFailure, message: str) -> "LoginResult":
        return cls(success=False, message=message, failure=failure)


class AuthService:
    """Session-based authentication for one request's database session."""

    def __init__(
        self,
        db: Session,
        users: UserDirectory | None = None,
        sessions: SessionStore | None = None,
        session_expiry: timedelta | None = None,
        max_failed_attempts: int | None = None,
    ) -> None:
        self.db = db
        self.users = users or UserDirectory(db)
        self.sessions = sessions or SessionStore(db)
        self.session_expiry = session_expiry or timedelta(
            hours=settings.session_expiry_hours
        )
        self.max_failed_attempts = (
            max_failed_attempts or settings.max_failed_login_attempts
        )

    def login(
        self,
        email: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> LoginResult:
        """Check credentials and issue a session token."""
        logger.info(f"Login attempt for {email}")
        try:
            return self._login(email, password, ip_address, user_agent)
        except (SQLAlchemyError, PersistenceFailure):
            self.db.rollback()
            logger.exception(f"Login for {email} failed with a storage error")
            return LoginResult.failed(
                AuthFailure.PERSISTENCE_FAILURE, LOGIN_ERROR_MESSAGE
            )

    def _login(
        self,
        email: str,
        password: str,
        ip_address: str | None,
        user_agent: str | None,
    ) -> LoginResult:
        user = self.users.get_active_by_email(email)
        if user is None:
            verify_password(password, DUMMY_SALT, "")
            logger.warning(f"Login failed for {email}: no active account")
            return LoginResult.failed(
                AuthFailure.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE
            )

        if user.failed_login_attempts >= self.max_failed_attempts:
            logger.warning(f"Login refused for {email}: account locked")
            return LoginResult.failed(
                AuthFailure.ACCOUNT_LOCKED, ACCOUNT_LOCKED_MESSAGE
            )

        if not verify_password(password, user.salt, user.password_hash):
            self.users.record_failed_login(user, utc_now())
            self.db.commit()
            logger.warning(
                f"Login failed for {email}: wrong password "
                f"({user.failed_login_attempts} consecutive failures)"
            )
            return LoginResult.failed(
                AuthFailure.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE
            )

        session = self._issue_session(user, ip_address, user_agent)
        self.users.record_successful_login(user, session.created_at)
        self.db.commit()

        logger.info(f"Login successful for {email}")
        return LoginResult(
            success=True,
            message=LOGIN_SUCCESS_MESSAGE,
            user=user,
            token=session.token,
            expires_at=session.expires_at,
        )

    def _issue_session(
        self,
        user: User,
        ip_address: str | None,
        user_agent: str | None,
    ) -> UserSession:
        """Insert a new active session, retrying on token collisions."""
        user_id = user.id
        for attempt in range(1, MAX_TOKEN_ATTEMPTS + 1):
            now = utc_now()
            session = UserSession(
                user_id=user_id,
                token=generate_session_token(),
                ip_address=ip_address[:50] if ip_address else None,
                user_agent=user_agent[:500] if user_agent else None,
                expires_at=now + self.session_expiry,
                is_active=True,
                created_at=now,
            )
            try:
                return self.sessions.insert(session)
            except ConstraintViolation:
                logger.warning(
                    f"Session token collision, retrying "
                    f"({attempt}/{MAX_TOKEN_ATTEMPTS})"
                )
        raise PersistenceFailure("Could not issue a unique session token")

    def logout(self, token: str) -> bool:
        """Deactivate the session for a token.

        Returns:
            True if an active session was found and deactivated
        """
        if not token:
            return False
        try:
            deactivated = self.sessions.deactivate(token)
            if deactivated:
                self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Logout failed with a storage error")
            return False

        if deactivated:
            logger.info("Session logged out")
        return deactivated

    def _find_valid_session(self, token: str) -> UserSession | None:
        if not token:
            return None
        session = self.sessions.find_active_by_token(token)
        if session is None or not session.is_valid_at(utc_now()):
            return None
        return session

    def validate_token(self, token: str) -> User | None:
        """Get the user owning a token if its session is active and unexpired."""
        try:
            session = self._find_valid_session(token)
            if session is None:
                return None
            user = self.users.get_by_id(session.user_id)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Token validation failed with a storage error")
            return None

        if user is None or not user.is_active:
            return None
        return user

    def refresh_session(self, token: str) -> datetime | None:
        """Push the expiry of a valid session one full window forward.

        Returns:
            The new expiry, or None if the token is not currently valid
        """
        try:
            session = self._find_valid_session(token)
            if session is None:
                return None
            self.sessions.extend(session, utc_now() + self.session_expiry)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Session refresh failed with a storage error")
            return None
        return session.expires_at
