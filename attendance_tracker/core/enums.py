from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Daily attendance status as stored and returned by the API."""

    PRESENT = "Present"
    ABSENT = "Absent"
    HALF_DAY = "Half Day"
    HOLIDAY = "Holiday"
    LEAVE = "Leave"


class RecordStatus(str, Enum):
    """Lifecycle flag shared by departments, designations and employees."""

    ACTIVE = "active"
    INACTIVE = "inactive"
