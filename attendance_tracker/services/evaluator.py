"""
Attendance evaluation rules.

Pure functions only: no store access, and no clock reads unless a caller
omits ``today``.  ``derive_status`` turns a day's check-in / check-out pair
into status, lateness and hours; the remaining helpers roll a batch of
records up into the dashboard trend and the monthly report totals.
"""

from __future__ import annotations

import calendar
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Protocol

from attendance_tracker.core.enums import AttendanceStatus
from attendance_tracker.core.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

DEFAULT_EXPECTED_CHECK_IN = "09:00"
HALF_DAY_CUTOFF_HOUR = 12
WEEKLY_WINDOW_DAYS = 7


class AttendanceLike(Protocol):
    date: date
    check_in_time: time | None
    check_out_time: time | None
    status: str
    is_late: bool
    late_minutes: int
    total_hours: float


def parse_clock(value: str | time) -> time:
    """Parse an ``HH:MM`` wall-clock value (a ``time`` passes through)."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    try:
        hour_s, minute_s = value.strip().split(":")
        return time(int(hour_s), int(minute_s))
    except (AttributeError, ValueError) as exc:
        raise InvalidArgumentError(f"Invalid clock value {value!r}, expected HH:MM") from exc


def derive_status(record: AttendanceLike, expected_check_in: str | time = DEFAULT_EXPECTED_CHECK_IN) -> AttendanceLike:
    """Re-evaluate status, lateness and hours from the record's times.

    Derived fields are reset first, so running this after any edit gives
    the same result as running it on a fresh record.  Without both times
    the caller's status stands.  With both, the check-out hour decides
    ``Half Day`` (before noon) vs ``Present`` and overrides any status the
    caller supplied.
    """
    expected_clock = parse_clock(expected_check_in)

    record.is_late = False
    record.late_minutes = 0
    record.total_hours = 0.0

    if record.check_in_time is None or record.check_out_time is None:
        return record

    if record.check_in_time.tzinfo is not None or record.check_out_time.tzinfo is not None:
        raise InvalidArgumentError("Check-in and check-out must be wall-clock times without a UTC offset")

    check_in = datetime.combine(record.date, record.check_in_time)
    check_out = datetime.combine(record.date, record.check_out_time)

    if record.check_out_time.hour < HALF_DAY_CUTOFF_HOUR:
        record.status = AttendanceStatus.HALF_DAY.value
    else:
        record.status = AttendanceStatus.PRESENT.value

    expected = datetime.combine(record.date, expected_clock)
    if check_in > expected:
        record.is_late = True
        record.late_minutes = int((check_in - expected).total_seconds() // 60)

    worked = check_out - check_in
    record.total_hours = round(worked.total_seconds() / 3600, 2)
    if worked < timedelta(0):
        # Kept as-is so the anomaly stays visible in reports
        logger.warning(
            "Check-out %s precedes check-in %s on %s (total_hours=%.2f)",
            record.check_out_time,
            record.check_in_time,
            record.date,
            record.total_hours,
        )
    return record


# ── Aggregation ─────────────────────────────────────────────────────
def trailing_days(today: date, days: int = WEEKLY_WINDOW_DAYS) -> list[date]:
    """Today first, then each preceding day."""
    return [today - timedelta(days=i) for i in range(days)]


def weekly_stats(records: Iterable[Any], today: date) -> dict[str, dict[str, int]]:
    """Per-day absent / present / half-day counts for the trailing week."""
    counts = {
        day.isoformat(): {"absent": 0, "present": 0, "half_day": 0}
        for day in trailing_days(today)
    }
    keys = {
        AttendanceStatus.ABSENT.value: "absent",
        AttendanceStatus.PRESENT.value: "present",
        AttendanceStatus.HALF_DAY.value: "half_day",
    }
    for rec in records:
        day = counts.get(rec.date.isoformat())
        key = keys.get(rec.status)
        if day is not None and key is not None:
            day[key] += 1
    return counts


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    return date(year, month, 1), date(year, month, days_in_month(year, month))


@dataclass(frozen=True)
class MonthlySummary:
    total_days: int
    present_days: int
    absent_days: int
    half_days: int
    late_days: int
    total_hours_worked: float
    total_late_minutes: int


def summarize_month(records: Iterable[Any], year: int, month: int) -> MonthlySummary:
    """Totals for one employee's records within a calendar month.

    ``total_days`` is the length of the month, not the number of records.
    """
    records = list(records)
    return MonthlySummary(
        total_days=days_in_month(year, month),
        present_days=sum(1 for r in records if r.status == AttendanceStatus.PRESENT.value),
        absent_days=sum(1 for r in records if r.status == AttendanceStatus.ABSENT.value),
        half_days=sum(1 for r in records if r.status == AttendanceStatus.HALF_DAY.value),
        late_days=sum(1 for r in records if r.is_late),
        total_hours_worked=round(sum(r.total_hours or 0.0 for r in records), 2),
        total_late_minutes=sum(r.late_minutes or 0 for r in records),
    )


def attendance_rate(present_days: int, total_days: int) -> float:
    """Percentage of the month marked Present; 0 when there are no days."""
    if total_days <= 0:
        return 0.0
    return round(present_days / total_days * 100, 2)
