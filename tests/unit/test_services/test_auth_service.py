# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for AuthService."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from tpa_hr.models import UserSession, utc_now
from tpa_hr.services import AuthFailure, AuthService
from tpa_hr.services import auth_service as auth_service_module
from tpa_hr.services.auth_service import (
    ACCOUNT_LOCKED_MESSAGE,
    INVALID_CREDENTIALS_MESSAGE,
    LOGIN_ERROR_MESSAGE,
)

TEST_PASSWORD = "testpassword123"


def fail_login(auth, times: int, email: str = "test@example.com") -> None:
    for _ in range(times):
        result = auth.login(email, "wrong-password")
        assert result.success is False


def test_unknown_email_and_wrong_password_look_the_same(auth, test_user):
    unknown = auth.login("nobody@example.com", TEST_PASSWORD)
    wrong = auth.login("test@example.com", "wrong-password")

    assert unknown.success is wrong.success is False
    assert unknown.message == wrong.message == INVALID_CREDENTIALS_MESSAGE
    assert unknown.failure is wrong.failure is AuthFailure.INVALID_CREDENTIALS
    assert unknown.token is None and wrong.token is None
    assert unknown.user is None and wrong.user is None


def test_successful_login(auth, db_session, test_user):
    before = utc_now()
    result = auth.login("test@example.com", TEST_PASSWORD)

    assert result.success is True
    assert result.message == "Login successful"
    assert result.user.id == test_user.id
    assert result.token

    session = db_session.query(UserSession).filter_by(token=result.token).one()
    assert session.is_active is True
    assert session.user_id == test_user.id
    assert session.expires_at - session.created_at == timedelta(hours=8)
    assert result.expires_at == session.expires_at

    db_session.refresh(test_user)
    assert test_user.last_login is not None
    assert test_user.last_login >= before


def test_login_email_is_case_insensitive(auth, test_user):
    result = auth.login("Test@EXAMPLE.com", TEST_PASSWORD)
    assert result.success is True


def test_login_records_client_details(auth, db_session, test_user):
    result = auth.login(
        "test@example.com",
        TEST_PASSWORD,
        ip_address="10.0.0.7",
        user_agent="pytest-agent",
    )
    session = db_session.query(UserSession).filter_by(token=result.token).one()
    assert session.ip_address == "10.0.0.7"
    assert session.user_agent == "pytest-agent"


def test_inactive_user_cannot_login(auth, inactive_user):
    result = auth.login("former@example.com", TEST_PASSWORD)
    assert result.success is False
    assert result.message == INVALID_CREDENTIALS_MESSAGE


def test_failed_login_increments_counter(auth, db_session, test_user):
    fail_login(auth, 3)
    db_session.refresh(test_user)
    assert test_user.failed_login_attempts == 3


def test_lockout_after_five_failures(auth, db_session, test_user):
    fail_login(auth, 5)

    result = auth.login("test@example.com", TEST_PASSWORD)

    assert result.success is False
    assert result.message == ACCOUNT_LOCKED_MESSAGE
    assert result.failure is AuthFailure.ACCOUNT_LOCKED
    assert result.token is None

    # Further attempts neither verify nor count
    auth.login("test@example.com", "wrong-password")
    db_session.refresh(test_user)
    assert test_user.failed_login_attempts == 5
    assert db_session.query(UserSession).count() == 0


def test_successful_login_resets_counter(auth, db_session, test_user):
    fail_login(auth, 4)
    result = auth.login("test@example.com", TEST_PASSWORD)

    assert result.success is True
    db_session.refresh(test_user)
    assert test_user.failed_login_attempts == 0


def test_each_login_issues_a_new_token(auth, test_user):
    tokens = {auth.login("test@example.com", TEST_PASSWORD).token for _ in range(5)}
    assert len(tokens) == 5


def test_lockout_threshold_is_configurable(db_session, test_user):
    auth = AuthService(db_session, max_failed_attempts=2)
    fail_login(auth, 2)
    assert auth.login("test@example.com", TEST_PASSWORD).message == (
        ACCOUNT_LOCKED_MESSAGE
    )


def test_validate_token(auth, test_user):
    token = auth.login("test@example.com", TEST_PASSWORD).token
    user = auth.validate_token(token)
    assert user is not None
    assert user.id == test_user.id


def test_validate_token_rejects_expired_session(auth, db_session, test_user):
    token = auth.login("test@example.com", TEST_PASSWORD).token
    session = db_session.query(UserSession).filter_by(token=token).one()
    session.expires_at = utc_now() - timedelta(seconds=1)
    db_session.commit()

    assert auth.validate_token(token) is None
    # Expiry is computed on read; the row stays active
    db_session.refresh(session)
    assert session.is_active is True


def test_validate_token_unknown_or_empty(auth):
    assert auth.validate_token("does-not-exist") is None
    assert auth.validate_token("") is None


def test_validate_token_rejects_deactivated_user(auth, db_session, test_user):
    token = auth.login("test@example.com", TEST_PASSWORD).token
    test_user.is_active = False
    db_session.commit()

    assert auth.validate_token(token) is None


def test_logout(auth, test_user):
    token = auth.login("test@example.com", TEST_PASSWORD).token

    assert auth.logout(token) is True
    assert auth.validate_token(token) is None
    assert auth.logout(token) is False


def test_logout_unknown_token_returns_false(auth):
    assert auth.logout("unknown") is False
    assert auth.logout("") is False


def test_logout_keeps_other_sessions(auth, test_user):
    first = auth.login("test@example.com", TEST_PASSWORD).token
    second = auth.login("test@example.com", TEST_PASSWORD).token

    assert auth.logout(first) is True
    assert auth.validate_token(second) is not None


def test_refresh_session_extends_expiry(auth, db_session, test_user):
    token = auth.login("test@example.com", TEST_PASSWORD).token
    session = db_session.query(UserSession).filter_by(token=token).one()
    session.expires_at = utc_now() + timedelta(minutes=5)
    db_session.commit()

    new_expiry = auth.refresh_session(token)

    assert new_expiry is not None
    assert new_expiry > utc_now() + timedelta(hours=7)
    db_session.refresh(session)
    assert session.expires_at == new_expiry


def test_refresh_does_not_revive_sessions(auth, db_session, test_user):
    logged_out = auth.login("test@example.com", TEST_PASSWORD).token
    auth.logout(logged_out)
    assert auth.refresh_session(logged_out) is None

    expired = auth.login("test@example.com", TEST_PASSWORD).token
    session = db_session.query(UserSession).filter_by(token=expired).one()
    session.expires_at = utc_now() - timedelta(minutes=1)
    db_session.commit()
    assert auth.refresh_session(expired) is None
    assert auth.validate_token(expired) is None


def test_token_collision_is_retried(auth, db_session, test_user, monkeypatch):
    existing = auth.login("test@example.com", TEST_PASSWORD).token
    tokens = iter([existing, "fresh-token"])
    monkeypatch.setattr(
        auth_service_module, "generate_session_token", lambda: next(tokens)
    )

    result = auth.login("test@example.com", TEST_PASSWORD)

    assert result.success is True
    assert result.token == "fresh-token"
    assert db_session.query(UserSession).count() == 2


def test_persistent_token_collision_fails_generically(
    auth, db_session, test_user, monkeypatch
):
    existing = auth.login("test@example.com", TEST_PASSWORD).token
    monkeypatch.setattr(
        auth_service_module, "generate_session_token", lambda: existing
    )

    result = auth.login("test@example.com", TEST_PASSWORD)

    assert result.success is False
    assert result.message == LOGIN_ERROR_MESSAGE
    assert result.failure is AuthFailure.PERSISTENCE_FAILURE
    assert db_session.query(UserSession).count() == 1


def test_storage_error_during_login_is_not_leaked(auth, test_user, monkeypatch):
    def broken(email):
        raise OperationalError("SELECT users", {}, Exception("disk I/O error"))

    monkeypatch.setattr(auth.users, "get_active_by_email", broken)

    result = auth.login("test@example.com", TEST_PASSWORD)

    assert result.success is False
    assert result.message == LOGIN_ERROR_MESSAGE
    assert "disk" not in result.message


def test_storage_error_during_validate_and_logout(auth, monkeypatch):
    def broken(token):
        raise OperationalError("SELECT sessions", {}, Exception("gone"))

    rollbacks = []
    real_rollback = auth.db.rollback

    def counting_rollback():
        rollbacks.append(True)
        real_rollback()

    monkeypatch.setattr(auth.sessions, "find_active_by_token", broken)
    monkeypatch.setattr(auth.db, "rollback", counting_rollback)

    assert auth.validate_token("anything") is None
    assert len(rollbacks) == 1
    assert auth.logout("anything") is False
    assert len(rollbacks) == 2


def test_unknown_email_still_runs_password_derivation(auth, monkeypatch):
    calls = []

    def recording_verify(password, salt, expected_hash):
        calls.append((password, salt))
        return False

    monkeypatch.setattr(auth_service_module, "verify_password", recording_verify)

    result = auth.login("nobody@example.com", "some-password")

    assert result.message == INVALID_CREDENTIALS_MESSAGE
    assert calls == [("some-password", auth_service_module.DUMMY_SALT)]


@pytest.mark.usefixtures("seeded_users")
def test_seeded_admin_end_to_end(auth):
    result = auth.login("admin@tpa.com", "admin123")
    assert result.success is True
    assert result.user.email == "admin@tpa.com"

    user = auth.validate_token(result.token)
    assert user is not None
    assert user.email == "admin@tpa.com"

    assert auth.logout(result.token) is True
    assert auth.validate_token(result.token) is None
