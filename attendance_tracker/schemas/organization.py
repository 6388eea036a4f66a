"""Pydantic schemas for Department / Designation / Employee."""

from __future__ import annotations

import datetime as dt
import re

from pydantic import BaseModel, Field, field_validator

from attendance_tracker.core.enums import RecordStatus

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _required_name(v: str, label: str, max_len: int) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{label} must not be empty")
    if len(v) > max_len:
        raise ValueError(f"{label} must not exceed {max_len} characters")
    return v


def _normalise_email(v: str) -> str:
    v = v.strip().lower()
    if not _EMAIL_RE.match(v):
        raise ValueError("Valid email is required")
    return v


# ── Department ──────────────────────────────────────────────────────
class DepartmentCreate(BaseModel):
    name: str
    description: str = ""
    status: RecordStatus = RecordStatus.ACTIVE

    model_config = {"use_enum_values": True}

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return _required_name(v, "Department name", 100)


class DepartmentUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    status: RecordStatus | None = None

    model_config = {"use_enum_values": True}

    @field_validator("name")
    @classmethod
    def _name(cls, v: str | None) -> str | None:
        return v if v is None else _required_name(v, "Department name", 100)


class DepartmentRead(BaseModel):
    id: int
    name: str
    description: str
    status: RecordStatus
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    model_config = {"from_attributes": True}


# ── Designation ─────────────────────────────────────────────────────
class DesignationCreate(BaseModel):
    name: str
    description: str = ""
    level: int = Field(default=1, ge=1)
    status: RecordStatus = RecordStatus.ACTIVE

    model_config = {"use_enum_values": True}

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return _required_name(v, "Designation name", 100)


class DesignationUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    level: int | None = Field(default=None, ge=1)
    status: RecordStatus | None = None

    model_config = {"use_enum_values": True}

    @field_validator("name")
    @classmethod
    def _name(cls, v: str | None) -> str | None:
        return v if v is None else _required_name(v, "Designation name", 100)


class DesignationRead(BaseModel):
    id: int
    name: str
    description: str
    level: int
    status: RecordStatus
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    model_config = {"from_attributes": True}


# ── Employee ────────────────────────────────────────────────────────
class EmployeeCreate(BaseModel):
    name: str
    email: str
    phone_number: str
    department_id: int
    designation_id: int
    joining_date: dt.date = Field(default_factory=dt.date.today)
    status: RecordStatus = RecordStatus.ACTIVE

    model_config = {"use_enum_values": True}

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return _required_name(v, "Employee name", 200)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return _normalise_email(v)

    @field_validator("phone_number")
    @classmethod
    def _phone(cls, v: str) -> str:
        return _required_name(v, "Phone number", 30)


class EmployeeUpdate(BaseModel):
    name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    department_id: int | None = None
    designation_id: int | None = None
    joining_date: dt.date | None = None
    status: RecordStatus | None = None

    model_config = {"use_enum_values": True}

    @field_validator("name")
    @classmethod
    def _name(cls, v: str | None) -> str | None:
        return v if v is None else _required_name(v, "Employee name", 200)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str | None) -> str | None:
        return v if v is None else _normalise_email(v)

    @field_validator("phone_number")
    @classmethod
    def _phone(cls, v: str | None) -> str | None:
        return v if v is None else _required_name(v, "Phone number", 30)


class EmployeeRead(BaseModel):
    id: int
    name: str
    email: str
    phone_number: str
    department_id: int
    designation_id: int
    department: DepartmentRead | None = None
    designation: DesignationRead | None = None
    joining_date: dt.date
    status: RecordStatus
    created_at: dt.datetime | None = None

    model_config = {"from_attributes": True}


# ── Generic ────────────────────────────────────────────────────────
class DeleteResponse(BaseModel):
    success: bool
    message: str
