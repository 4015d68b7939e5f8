#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Create the schema and the demo user accounts."""

from __future__ import annotations

import argparse
import logging
import sys

from tpa_hr.database import SessionLocal, init_db
from tpa_hr.exceptions import ConstraintViolation
from tpa_hr.services.seed_service import DEFAULT_USERS, create_user, seed_default_users

logger = logging.getLogger("seed_users")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--email",
        help="Create a single account instead of the demo set",
    )
    parser.add_argument("--password", help="Password for --email")
    parser.add_argument("--role", default="employee", help="Role for --email")
    parser.add_argument(
        "--skip-migrations",
        action="store_true",
        help="Do not run Alembic before seeding",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    if args.email and not args.password:
        logger.error("--password is required with --email")
        return 2

    if not args.skip_migrations:
        init_db()

    db = SessionLocal()
    try:
        if args.email:
            try:
                user = create_user(db, args.email, args.password, role=args.role)
            except ConstraintViolation as e:
                logger.error(str(e))
                return 1
            logger.info(f"Created {user.email} ({user.role.value})")
        else:
            created = seed_default_users(db)
            logger.info(
                f"{len(created)} of {len(DEFAULT_USERS)} demo accounts created"
            )
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
