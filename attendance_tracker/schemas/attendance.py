"""Pydantic schemas for attendance marking, dashboard and reports."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, field_validator

from attendance_tracker.core.enums import AttendanceStatus
from attendance_tracker.schemas.organization import EmployeeRead


# ── Mark ────────────────────────────────────────────────────────────
class MarkAttendanceRequest(BaseModel):
    """Create-or-update payload for one employee-day.

    On update only the fields present in the body are applied; an explicit
    ``null`` clears a time, an omitted field keeps the stored value.
    """

    employee_id: int
    date: dt.date
    check_in_time: dt.time | None = None
    check_out_time: dt.time | None = None
    status: AttendanceStatus | None = None
    remarks: str | None = None

    @field_validator("check_in_time", "check_out_time")
    @classmethod
    def _wall_clock(cls, v: dt.time | None) -> dt.time | None:
        if v is not None and v.tzinfo is not None:
            raise ValueError("Times are local wall-clock values; drop the UTC offset")
        return v


# ── Attendance ──────────────────────────────────────────────────────
class AttendanceRead(BaseModel):
    id: int
    employee_id: int
    date: dt.date
    check_in_time: dt.time | None = None
    check_out_time: dt.time | None = None
    status: AttendanceStatus
    is_late: bool
    late_minutes: int
    total_hours: float
    remarks: str = ""
    employee: EmployeeRead | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    model_config = {"from_attributes": True}


class MarkAttendanceResponse(BaseModel):
    success: bool
    message: str
    data: AttendanceRead


# ── Dashboard ───────────────────────────────────────────────────────
class DayCounts(BaseModel):
    absent: int = 0
    present: int = 0
    half_day: int = 0


class DashboardResponse(BaseModel):
    today_absentees: list[AttendanceRead]
    weekly_stats: dict[str, DayCounts]


# ── Monthly Report ─────────────────────────────────────────────────
class MonthlyReportResponse(BaseModel):
    employee: EmployeeRead
    month: str
    total_days: int
    present_days: int
    absent_days: int
    half_days: int
    late_days: int
    total_hours_worked: float
    total_late_minutes: int
    attendance_rate: float
    details: list[AttendanceRead]


# ── Health / Status ────────────────────────────────────────────────
class HealthResponse(BaseModel):
    db: bool
    backend: str


class StatusResponse(BaseModel):
    total_employees: int
    today_marked: int
    status: str
