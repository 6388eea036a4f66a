"""
Attendance Tracker — application entry point.

This is the **only** file that assembles the app.  Business rules live in
``services/``, storage in ``repositories/`` and ``models/``, HTTP in ``api/``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from attendance_tracker.api.v1.api import api_router
from attendance_tracker.core.config import settings
from attendance_tracker.core.exceptions import register_exception_handlers
from attendance_tracker.db.base import Base
from attendance_tracker.db.session import engine

# Ensure all models are imported so metadata.create_all can see them
from attendance_tracker.models.attendance import Attendance  # noqa: F401
from attendance_tracker.models.employee import Employee  # noqa: F401
from attendance_tracker.models.organization import Department, Designation  # noqa: F401

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.STORAGE_BACKEND == "database":
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables initialised")
    else:
        logger.info("Running with the in-memory store; nothing is persisted")

    logger.info("%s v%s started (expected check-in %s)",
                settings.PROJECT_NAME, settings.VERSION, settings.EXPECTED_CHECK_IN)
    yield
    await engine.dispose()
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app() -> FastAPI:
    application = FastAPI(
        title="Attendance Tracker",
        description="Employee attendance tracking: departments, designations, employees, daily attendance and reports",
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global exception handlers (prevent stack-trace leakage)
    register_exception_handlers(application)

    # Mount API v1
    application.include_router(api_router, prefix=settings.API_V1_PREFIX)

    return application


app = create_app()
