"""
Volatile in-process store.

Keeps transient ORM instances in dictionaries for the life of the process,
handy for demos and for running the API without a database.  Unique keys
(department / designation name, employee email, employee + date) are
enforced here the same way the SQL indexes enforce them.
"""

from __future__ import annotations

import itertools
import logging
from datetime import date, datetime, timezone
from typing import Generic, Optional, Sequence, TypeVar

from attendance_tracker.core.exceptions import ConflictError, NotFoundError
from attendance_tracker.models.attendance import Attendance
from attendance_tracker.models.employee import Employee
from attendance_tracker.models.organization import Department, Designation

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class MemoryRepository(Generic[ModelT]):
    conflict_message = "Duplicate entry"

    def __init__(self, store: "MemoryStore") -> None:
        self._store = store
        self._rows: dict[int, ModelT] = {}
        self._ids = itertools.count(1)

    async def get(self, entity_id: int) -> Optional[ModelT]:
        return self._rows.get(entity_id)

    async def add(self, entity: ModelT) -> ModelT:
        self._check_unique(entity)
        self._resolve(entity)
        now = datetime.now(timezone.utc)
        entity.id = next(self._ids)
        entity.created_at = now
        entity.updated_at = now
        self._rows[entity.id] = entity
        return entity

    async def save(self, entity: ModelT) -> ModelT:
        self._check_unique(entity)
        self._resolve(entity)
        entity.updated_at = datetime.now(timezone.utc)
        self._rows[entity.id] = entity
        return entity

    async def delete(self, entity: ModelT) -> None:
        self._rows.pop(entity.id, None)

    def _key(self, entity: ModelT) -> object:
        return None

    def _check_unique(self, entity: ModelT) -> None:
        key = self._key(entity)
        if key is None:
            return
        for row in self._rows.values():
            if row is not entity and self._key(row) == key:
                raise ConflictError(self.conflict_message)

    def _resolve(self, entity: ModelT) -> None:
        """Attach referenced entities the way the ORM relationships would."""


class MemoryDepartmentRepository(MemoryRepository[Department]):
    conflict_message = "Department already exists"

    def _key(self, entity: Department) -> object:
        return entity.name

    async def get_by_name(self, name: str) -> Optional[Department]:
        return next((d for d in self._rows.values() if d.name == name), None)

    async def list_all(self) -> Sequence[Department]:
        return sorted(self._rows.values(), key=lambda d: d.name)


class MemoryDesignationRepository(MemoryRepository[Designation]):
    conflict_message = "Designation already exists"

    def _key(self, entity: Designation) -> object:
        return entity.name

    async def get_by_name(self, name: str) -> Optional[Designation]:
        return next((d for d in self._rows.values() if d.name == name), None)

    async def list_all(self) -> Sequence[Designation]:
        return sorted(self._rows.values(), key=lambda d: (d.level, d.name))


class MemoryEmployeeRepository(MemoryRepository[Employee]):
    conflict_message = "Employee with this email already exists"

    def _key(self, entity: Employee) -> object:
        return entity.email

    def _resolve(self, entity: Employee) -> None:
        department = self._store.departments._rows.get(entity.department_id)
        designation = self._store.designations._rows.get(entity.designation_id)
        if department is None or designation is None:
            raise NotFoundError("Department or designation not found")
        entity.department = department
        entity.designation = designation

    async def get_by_email(self, email: str) -> Optional[Employee]:
        return next((e for e in self._rows.values() if e.email == email), None)

    def _filter(
        self,
        department_id: Optional[int],
        designation_id: Optional[int],
        include_inactive: bool,
    ) -> list[Employee]:
        return [
            e
            for e in self._rows.values()
            if (department_id is None or e.department_id == department_id)
            and (designation_id is None or e.designation_id == designation_id)
            and (include_inactive or e.status == "active")
        ]

    async def list_all(
        self,
        *,
        department_id: Optional[int] = None,
        designation_id: Optional[int] = None,
        include_inactive: bool = False,
    ) -> Sequence[Employee]:
        rows = self._filter(department_id, designation_id, include_inactive)
        return sorted(rows, key=lambda e: e.name)

    async def count(
        self,
        *,
        department_id: Optional[int] = None,
        designation_id: Optional[int] = None,
        include_inactive: bool = True,
    ) -> int:
        return len(self._filter(department_id, designation_id, include_inactive))


class MemoryAttendanceRepository(MemoryRepository[Attendance]):
    conflict_message = "Attendance for this employee and date already exists"

    def _key(self, entity: Attendance) -> object:
        return (entity.employee_id, entity.date)

    def _resolve(self, entity: Attendance) -> None:
        employee = self._store.employees._rows.get(entity.employee_id)
        if employee is None:
            raise NotFoundError("Employee not found")
        entity.employee = employee

    async def find(self, employee_id: int, day: date) -> Optional[Attendance]:
        return next(
            (a for a in self._rows.values() if a.employee_id == employee_id and a.date == day),
            None,
        )

    async def query(
        self,
        *,
        employee_id: Optional[int] = None,
        on: Optional[date] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[str] = None,
        newest_first: bool = False,
    ) -> Sequence[Attendance]:
        rows = [
            a
            for a in self._rows.values()
            if (employee_id is None or a.employee_id == employee_id)
            and (on is None or a.date == on)
            and (start is None or a.date >= start)
            and (end is None or a.date <= end)
            and (status is None or a.status == status)
        ]
        rows.sort(key=lambda a: a.employee_id)
        rows.sort(key=lambda a: a.date, reverse=newest_first)
        return rows

    async def count(self, *, on: Optional[date] = None) -> int:
        return sum(1 for a in self._rows.values() if on is None or a.date == on)


class MemoryStore:
    """Process-lifetime store; one shared instance serves every request."""

    def __init__(self) -> None:
        self.departments = MemoryDepartmentRepository(self)
        self.designations = MemoryDesignationRepository(self)
        self.employees = MemoryEmployeeRepository(self)
        self.attendance = MemoryAttendanceRepository(self)
        logger.info("In-memory store initialised (data is lost on restart)")

    async def ping(self) -> bool:
        return True
