"""
Employee model — references one department and one designation.
"""

from __future__ import annotations

import datetime as dt

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from attendance_tracker.db.base import Base
from attendance_tracker.models.organization import Department, Designation, _utcnow


class Employee(Base):
    __tablename__ = "employees"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    name: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    email: str = Column(String(320), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    phone_number: str = Column(String(30), nullable=False)  # type: ignore[assignment]
    department_id: int = Column(Integer, ForeignKey("departments.id"), nullable=False)  # type: ignore[assignment]
    designation_id: int = Column(Integer, ForeignKey("designations.id"), nullable=False)  # type: ignore[assignment]
    joining_date: dt.date = Column(Date, nullable=False, default=dt.date.today)  # type: ignore[assignment]
    status: str = Column(String(10), nullable=False, default="active")  # type: ignore[assignment]
    created_at: dt.datetime = Column(DateTime(timezone=True), default=_utcnow)  # type: ignore[assignment]
    updated_at: dt.datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
    )

    # Eager so async reads never trigger a lazy load
    department: Department = relationship(Department, lazy="selectin")  # type: ignore[assignment]
    designation: Designation = relationship(Designation, lazy="selectin")  # type: ignore[assignment]
