"""
Store interfaces.

Services only talk to these protocols; ``SqlStore`` and ``MemoryStore``
are the two implementations, chosen when the API builds its dependencies.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence, TypeVar

from attendance_tracker.models.attendance import Attendance
from attendance_tracker.models.employee import Employee
from attendance_tracker.models.organization import Department, Designation

ModelT = TypeVar("ModelT")


class Repository(Protocol[ModelT]):
    async def get(self, entity_id: int) -> Optional[ModelT]:
        raise NotImplementedError

    async def add(self, entity: ModelT) -> ModelT:
        """Insert and return the stored entity (id and references resolved)."""

        raise NotImplementedError

    async def save(self, entity: ModelT) -> ModelT:
        """Persist changes made to an entity obtained from this repository."""

        raise NotImplementedError

    async def delete(self, entity: ModelT) -> None:
        raise NotImplementedError


class DepartmentRepository(Repository[Department], Protocol):
    async def get_by_name(self, name: str) -> Optional[Department]:
        raise NotImplementedError

    async def list_all(self) -> Sequence[Department]:
        raise NotImplementedError


class DesignationRepository(Repository[Designation], Protocol):
    async def get_by_name(self, name: str) -> Optional[Designation]:
        raise NotImplementedError

    async def list_all(self) -> Sequence[Designation]:
        raise NotImplementedError


class EmployeeRepository(Repository[Employee], Protocol):
    async def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    async def list_all(
        self,
        *,
        department_id: Optional[int] = None,
        designation_id: Optional[int] = None,
        include_inactive: bool = False,
    ) -> Sequence[Employee]:
        raise NotImplementedError

    async def count(
        self,
        *,
        department_id: Optional[int] = None,
        designation_id: Optional[int] = None,
        include_inactive: bool = True,
    ) -> int:
        raise NotImplementedError


class AttendanceRepository(Repository[Attendance], Protocol):
    async def find(self, employee_id: int, day: date) -> Optional[Attendance]:
        raise NotImplementedError

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
        """Records matching every given filter, ordered by date then employee."""

        raise NotImplementedError

    async def count(self, *, on: Optional[date] = None) -> int:
        raise NotImplementedError


class Store(Protocol):
    departments: DepartmentRepository
    designations: DesignationRepository
    employees: EmployeeRepository
    attendance: AttendanceRepository

    async def ping(self) -> bool:
        raise NotImplementedError
