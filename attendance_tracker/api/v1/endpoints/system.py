"""
Health / status endpoints.
"""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends

from attendance_tracker.api.v1.deps import get_store
from attendance_tracker.core.config import settings
from attendance_tracker.repositories.base import Store
from attendance_tracker.schemas.attendance import HealthResponse, StatusResponse

router = APIRouter(tags=["system"])
logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health(store: Store = Depends(get_store)) -> HealthResponse:
    """Store connectivity check."""
    result = HealthResponse(db=False, backend=settings.STORAGE_BACKEND)
    try:
        result.db = await store.ping()
    except Exception as e:
        logger.error("Health check store failure: %s", e)
    return result


@router.get("/status", response_model=StatusResponse)
async def system_status(store: Store = Depends(get_store)) -> StatusResponse:
    """Active employee count and how many records were marked today."""
    return StatusResponse(
        total_employees=await store.employees.count(include_inactive=False),
        today_marked=await store.attendance.count(on=date.today()),
        status="operational",
    )
