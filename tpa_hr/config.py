# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Application configuration loaded from the environment."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings.

    Every field can be overridden with an environment variable of the same
    name in upper case, e.g. ``DATABASE_URL`` or ``SESSION_EXPIRY_HOURS``.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = Field(default="sqlite:///./tpa_hr.db")

    # Authentication
    session_expiry_hours: int = Field(default=8, gt=0)
    max_failed_login_attempts: int = Field(default=5, gt=0)
    password_hash_iterations: int = Field(default=10_000, gt=0)

    log_level: str = Field(default="INFO")
    cors_origins: list[str] = Field(default=["http://localhost:3000"])
    seed_demo_users: bool = Field(default=False)


settings = Settings()
