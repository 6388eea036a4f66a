"""
Attendance service — marks attendance and builds the dashboard / monthly
report through whichever store it is handed.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date, time
from typing import Any, Optional, Sequence

from attendance_tracker.core.enums import AttendanceStatus
from attendance_tracker.core.exceptions import InvalidArgumentError, NotFoundError
from attendance_tracker.models.attendance import Attendance
from attendance_tracker.models.employee import Employee
from attendance_tracker.repositories.base import Store
from attendance_tracker.services.evaluator import (DEFAULT_EXPECTED_CHECK_IN,
                                                   attendance_rate,
                                                   derive_status, month_bounds,
                                                   parse_clock,
                                                   summarize_month,
                                                   trailing_days,
                                                   weekly_stats)

logger = logging.getLogger(__name__)

MIN_REPORT_YEAR = 2000
MAX_REPORT_YEAR = 2100


class _Unset:
    """Marks a keyword argument the caller did not pass at all."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def _coerce_status(value: Any) -> str:
    try:
        return AttendanceStatus(value).value
    except ValueError as exc:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise InvalidArgumentError(
            f"Invalid attendance status {value!r} (expected one of: {allowed})"
        ) from exc


class AttendanceService:
    def __init__(self, store: Store, *, expected_check_in: str | time = DEFAULT_EXPECTED_CHECK_IN):
        self._store = store
        self._expected_check_in = parse_clock(expected_check_in)

    async def _require_employee(self, employee_id: Optional[int]) -> Employee:
        if employee_id is None:
            raise InvalidArgumentError("Employee ID is required")
        employee = await self._store.employees.get(employee_id)
        if employee is None:
            raise NotFoundError("Employee not found")
        return employee

    async def mark_attendance(
        self,
        employee_id: Optional[int],
        day: Optional[date],
        *,
        check_in_time: Optional[time] = UNSET,
        check_out_time: Optional[time] = UNSET,
        status: Any = UNSET,
        remarks: Optional[str] = UNSET,
    ) -> tuple[Attendance, bool]:
        """Create or update the record for ``(employee_id, day)``.

        Returns ``(record, created)``.  Only arguments that were actually
        passed overwrite an existing record; passing ``None`` for a time
        clears it.  Status is re-derived after every write.
        """
        if employee_id is None:
            raise InvalidArgumentError("Employee ID is required")
        if day is None:
            raise InvalidArgumentError("Date is required")
        if status is not UNSET and status is not None:
            status = _coerce_status(status)
        for label, value in (("check_in_time", check_in_time), ("check_out_time", check_out_time)):
            if isinstance(value, time) and value.tzinfo is not None:
                raise InvalidArgumentError(f"{label} must not carry a UTC offset")
        await self._require_employee(employee_id)

        record = await self._store.attendance.find(employee_id, day)
        created = record is None

        if record is None:
            record = Attendance(
                employee_id=employee_id,
                date=day,
                check_in_time=None if check_in_time is UNSET else check_in_time,
                check_out_time=None if check_out_time is UNSET else check_out_time,
                status=status or AttendanceStatus.ABSENT.value,
                is_late=False,
                late_minutes=0,
                total_hours=0.0,
                remarks=remarks or "",
            )
        else:
            if check_in_time is not UNSET:
                record.check_in_time = check_in_time
            if check_out_time is not UNSET:
                record.check_out_time = check_out_time
            if status:
                record.status = status
            if remarks is not UNSET:
                record.remarks = remarks or ""

        derive_status(record, self._expected_check_in)

        if created:
            record = await self._store.attendance.add(record)
        else:
            record = await self._store.attendance.save(record)

        logger.info(
            "%s attendance %s for employee %d on %s (late=%s, hours=%.2f)",
            "Marked" if created else "Updated",
            record.status,
            employee_id,
            day.isoformat(),
            record.is_late,
            record.total_hours,
        )
        return record, created

    async def list_by_date(self, day: date) -> Sequence[Attendance]:
        return await self._store.attendance.query(on=day)

    async def list_for_employee(
        self,
        employee_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Attendance]:
        """An employee's records, newest first, optionally within a range."""
        await self._require_employee(employee_id)
        if start is not None and end is not None and start > end:
            raise InvalidArgumentError("start_date must not be after end_date")
        return await self._store.attendance.query(
            employee_id=employee_id, start=start, end=end, newest_first=True
        )

    async def get_dashboard_stats(self, today: Optional[date] = None) -> dict[str, Any]:
        today = today or date.today()
        window = trailing_days(today)

        absentees = await self._store.attendance.query(
            on=today, status=AttendanceStatus.ABSENT.value
        )
        week = await self._store.attendance.query(start=window[-1], end=today)

        return {
            "today_absentees": list(absentees),
            "weekly_stats": weekly_stats(week, today),
        }

    async def get_monthly_report(self, employee_id: Optional[int], year: int, month: int) -> dict[str, Any]:
        if not MIN_REPORT_YEAR <= year <= MAX_REPORT_YEAR:
            raise InvalidArgumentError(
                f"Valid year is required ({MIN_REPORT_YEAR}-{MAX_REPORT_YEAR})"
            )
        if not 1 <= month <= 12:
            raise InvalidArgumentError("Valid month is required (1-12)")
        employee = await self._require_employee(employee_id)

        start, end = month_bounds(year, month)
        records = await self._store.attendance.query(
            employee_id=employee.id, start=start, end=end
        )
        summary = summarize_month(records, year, month)

        return {
            "employee": employee,
            "month": f"{year:04d}-{month:02d}",
            **asdict(summary),
            "attendance_rate": attendance_rate(summary.present_days, summary.total_days),
            "details": list(records),
        }
