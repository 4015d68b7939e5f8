# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Provisioning of user accounts."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tpa_hr.exceptions import ConstraintViolation
from tpa_hr.models import User, UserRole
from tpa_hr.security import generate_salt, hash_password
from tpa_hr.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)

# Demo accounts used by the front-end and by the smoke tests
DEFAULT_USERS = [
    {"email": "admin@tpa.com", "password": "admin123", "role": UserRole.ADMIN},
    {"email": "hr@tpa.com", "password": "hr123", "role": UserRole.HRADMIN},
    {"email": "staff@tpa.com", "password": "staff123", "role": UserRole.EMPLOYEE},
    {"email": "field@tpa.com", "password": "field123", "role": UserRole.EMPLOYEE},
    {"email": "demo@tpa.com", "password": "demo123", "role": UserRole.MANAGER},
]


def create_user(
    db: Session,
    email: str,
    password: str,
    role: UserRole | str = UserRole.EMPLOYEE,
    is_active: bool = True,
) -> User:
    """Create a user with a freshly salted password hash.

    Raises:
        ConstraintViolation: if the email is already registered
    """
    email = email.strip().lower()
    if UserDirectory(db).get_by_email(email) is not None:
        raise ConstraintViolation(f"Email already exists: {email}", field="email")

    salt = generate_salt()
    user = User(
        email=email,
        password_hash=hash_password(password, salt),
        salt=salt,
        role=UserRole.parse(role) if isinstance(role, str) else role,
        is_active=is_active,
        failed_login_attempts=0,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConstraintViolation(
            f"Email already exists: {email}", field="email"
        ) from e
    db.refresh(user)
    return user


def seed_default_users(db: Session) -> list[User]:
    """Create the demo accounts that do not exist yet.

    This function is idempotent.
    @param db: SQLAlchemy Session object
    @return: the users created by this call
    """
    directory = UserDirectory(db)
    created = []
    for user_data in DEFAULT_USERS:
        if directory.get_by_email(user_data["email"]) is not None:
            continue
        created.append(create_user(db, **user_data))

    if created:
        logger.info(f"Seeded {len(created)} default users")
    return created
