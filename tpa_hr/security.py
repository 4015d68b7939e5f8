# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Password hashing and token generation.

Passwords are stored as base64(PBKDF2-HMAC-SHA256(password, salt)) next to
their base64 salt. The same derivation is used for provisioning and for
login verification.
"""

import base64
import binascii
import hmac
import secrets

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from tpa_hr.config import settings

SALT_BYTES = 32
HASH_BYTES = 32
SESSION_TOKEN_BYTES = 64


def generate_salt() -> str:
    """Return a fresh random salt, base64 encoded."""
    return base64.b64encode(secrets.token_bytes(SALT_BYTES)).decode("ascii")


def hash_password(password: str, salt: str, iterations: int | None = None) -> str:
    """Derive the stored hash for a password and salt.

    Salts from generate_salt always decode. Only a malformed stored salt
    raises, and verify_password treats that as a mismatch.

    Raises:
        ValueError: if a stored salt is not valid base64
    """
    try:
        salt_bytes = base64.b64decode(salt.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise ValueError("Salt is not valid base64") from e

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=HASH_BYTES,
        salt=salt_bytes,
        iterations=iterations or settings.password_hash_iterations,
    )
    digest = kdf.derive(password.encode("utf-8"))
    return base64.b64encode(digest).decode("ascii")


def verify_password(password: str, salt: str, expected_hash: str) -> bool:
    """Check a password against a stored hash and salt."""
    try:
        computed = hash_password(password, salt)
    except ValueError:
        return False
    return hmac.compare_digest(computed.encode("ascii"), expected_hash.encode("utf-8"))


def generate_session_token() -> str:
    """Return an unguessable URL-safe session token (512 bits)."""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)
