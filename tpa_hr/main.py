# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tpa_hr import __version__
from tpa_hr.config import settings
from tpa_hr.database import SessionLocal, init_db
from tpa_hr.schemas.common import HealthResponse
from tpa_hr.services.seed_service import seed_default_users

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    if settings.seed_demo_users:
        init_db()
        db = SessionLocal()
        try:
            seed_default_users(db)
        finally:
            db.close()

    yield

    logger.info("Shutting down...")

app = FastAPI(
    title="TPA HR System API",
    description="Authentication and session backend for the TPA HR system",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware for the React front-end
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy")


# Import and include API router after it's created
from tpa_hr.api.v1.router import api_router  # noqa: E402

app.include_router(api_router, prefix="/api/v1")
