"""
Attendance model — one row per (employee, calendar day).

The ``uq_attendance_emp_date`` constraint is the only guard against two
concurrent "mark" calls inserting diverging rows for the same day.
"""

from __future__ import annotations

import datetime as dt

from sqlalchemy import (Boolean, Column, Date, DateTime, Float, ForeignKey,
                        Index, Integer, String, Time, UniqueConstraint)
from sqlalchemy.orm import relationship

from attendance_tracker.db.base import Base
from attendance_tracker.models.employee import Employee
from attendance_tracker.models.organization import _utcnow


class Attendance(Base):
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("employee_id", "date", name="uq_attendance_emp_date"),
        Index("ix_attendance_date_status", "date", "status"),
    )

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    employee_id: int = Column(Integer, ForeignKey("employees.id"), nullable=False)  # type: ignore[assignment]
    date: dt.date = Column(Date, nullable=False, index=True)  # type: ignore[assignment]
    check_in_time: dt.time | None = Column(Time, nullable=True)  # type: ignore[assignment]
    check_out_time: dt.time | None = Column(Time, nullable=True)  # type: ignore[assignment]
    status: str = Column(String(20), nullable=False, default="Absent")  # type: ignore[assignment]
    # Present | Absent | Half Day | Holiday | Leave
    is_late: bool = Column(Boolean, nullable=False, default=False)  # type: ignore[assignment]
    late_minutes: int = Column(Integer, nullable=False, default=0)  # type: ignore[assignment]
    total_hours: float = Column(Float, nullable=False, default=0.0)  # type: ignore[assignment]
    remarks: str = Column(String(500), nullable=False, default="")  # type: ignore[assignment]
    created_at: dt.datetime = Column(DateTime(timezone=True), default=_utcnow)  # type: ignore[assignment]
    updated_at: dt.datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
    )

    employee: Employee = relationship(Employee, lazy="selectin")  # type: ignore[assignment]
