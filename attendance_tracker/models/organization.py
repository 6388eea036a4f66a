"""
Department & Designation models — the organisational identity tables.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String

from attendance_tracker.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Department(Base):
    __tablename__ = "departments"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    name: str = Column(String(100), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    description: str = Column(String(500), nullable=False, default="")  # type: ignore[assignment]
    status: str = Column(String(10), nullable=False, default="active")  # type: ignore[assignment]
    # active | inactive
    created_at: datetime = Column(DateTime(timezone=True), default=_utcnow)  # type: ignore[assignment]
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
    )


class Designation(Base):
    __tablename__ = "designations"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    name: str = Column(String(100), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    description: str = Column(String(500), nullable=False, default="")  # type: ignore[assignment]
    level: int = Column(Integer, nullable=False, default=1)  # type: ignore[assignment]
    status: str = Column(String(10), nullable=False, default="active")  # type: ignore[assignment]
    created_at: datetime = Column(DateTime(timezone=True), default=_utcnow)  # type: ignore[assignment]
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
    )
