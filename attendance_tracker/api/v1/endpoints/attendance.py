"""
Attendance endpoints — mark, daily / per-employee listings, dashboard and
the monthly per-employee report.
"""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, Response, status

from attendance_tracker.api.v1.deps import get_attendance_service
from attendance_tracker.models.attendance import Attendance
from attendance_tracker.schemas.attendance import (AttendanceRead,
                                                   DashboardResponse,
                                                   MarkAttendanceRequest,
                                                   MarkAttendanceResponse,
                                                   MonthlyReportResponse)
from attendance_tracker.services.attendance import AttendanceService

router = APIRouter(prefix="/attendance", tags=["attendance"])
logger = logging.getLogger(__name__)


@router.post("/mark", response_model=MarkAttendanceResponse)
async def mark_attendance(
    body: MarkAttendanceRequest,
    response: Response,
    service: AttendanceService = Depends(get_attendance_service),
) -> MarkAttendanceResponse:
    """Create the day's record, or update it if one already exists.

    Fields left out of the body keep their stored values on update.
    """
    supplied = body.model_dump(
        include=body.model_fields_set & {"check_in_time", "check_out_time", "status", "remarks"}
    )
    record, created = await service.mark_attendance(body.employee_id, body.date, **supplied)

    if created:
        response.status_code = status.HTTP_201_CREATED
    return MarkAttendanceResponse(
        success=True,
        message="Attendance marked successfully" if created else "Attendance updated successfully",
        data=AttendanceRead.model_validate(record),
    )


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    service: AttendanceService = Depends(get_attendance_service),
) -> dict:
    """Today's absentees plus absent / present / half-day counts for the last 7 days."""
    return await service.get_dashboard_stats()


@router.get("/date/{day}", response_model=list[AttendanceRead])
async def attendance_by_date(
    day: date,
    service: AttendanceService = Depends(get_attendance_service),
) -> list[Attendance]:
    return list(await service.list_by_date(day))


@router.get("/employee/{employee_id}", response_model=list[AttendanceRead])
async def attendance_for_employee(
    employee_id: int,
    start_date: date | None = None,
    end_date: date | None = None,
    service: AttendanceService = Depends(get_attendance_service),
) -> list[Attendance]:
    """Newest first; `start_date` / `end_date` bound the range inclusively."""
    return list(
        await service.list_for_employee(employee_id, start=start_date, end=end_date)
    )


@router.get("/report/{employee_id}/{year}/{month}", response_model=MonthlyReportResponse)
async def monthly_report(
    employee_id: int,
    year: int,
    month: int,
    service: AttendanceService = Depends(get_attendance_service),
) -> dict:
    """Per-employee totals for one calendar month."""
    return await service.get_monthly_report(employee_id, year, month)
