# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Database engine and session factory."""

import logging
from collections.abc import Generator
from pathlib import Path

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from alembic import command
from alembic.config import Config
from tpa_hr.config import settings

logger = logging.getLogger(__name__)

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def _connect_args(url: str) -> dict:
    # SQLite connections are shared across the threadpool FastAPI runs sync
    # endpoints in.
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def enable_sqlite_savepoints(engine: Engine) -> None:
    """Let SQLAlchemy issue BEGIN itself so SAVEPOINT works on pysqlite.

    The driver's own transaction handling starts transactions lazily and
    would let RELEASE SAVEPOINT commit the outer transaction.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


engine = create_engine(
    settings.database_url,
    connect_args=_connect_args(settings.database_url),
)
enable_sqlite_savepoints(engine)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session]:
    """Get a request-scoped database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Bring the schema up to date by running Alembic migrations."""
    alembic_cfg = Config(str(ALEMBIC_INI))
    alembic_cfg.set_main_option(
        "script_location", str(ALEMBIC_INI.parent / "alembic")
    )
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)
    alembic_cfg.attributes["configure_logger"] = False
    logger.info("Running database migrations...")
    command.upgrade(alembic_cfg, "head")
