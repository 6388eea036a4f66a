"""
SQLAlchemy (async) store.

Each write commits immediately and re-reads the row with
``populate_existing`` so relationships reflect any changed foreign keys.
Unique-index violations surface as ``ConflictError``; any other database
failure as ``InternalError``.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Generic, Optional, Sequence, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_tracker.core.exceptions import ConflictError, InternalError
from attendance_tracker.db.base import Base
from attendance_tracker.models.attendance import Attendance
from attendance_tracker.models.employee import Employee
from attendance_tracker.models.organization import Department, Designation

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class SqlRepository(Generic[ModelT]):
    model: type[ModelT]
    conflict_message = "Duplicate entry"

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, entity_id: int) -> Optional[ModelT]:
        result = await self._session.execute(
            select(self.model)
            .where(self.model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def add(self, entity: ModelT) -> ModelT:
        self._session.add(entity)
        await self._commit()
        return await self._reload(entity)

    async def save(self, entity: ModelT) -> ModelT:
        await self._commit()
        return await self._reload(entity)

    async def delete(self, entity: ModelT) -> None:
        await self._session.delete(entity)
        await self._commit()

    async def _reload(self, entity: ModelT) -> ModelT:
        entity_id = entity.id
        self._session.expire(entity)
        reloaded = await self.get(entity_id)
        if reloaded is None:
            raise InternalError(f"{self.model.__name__} {entity_id} vanished after write")
        return reloaded

    async def _commit(self) -> None:
        try:
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            logger.warning("%s rejected by constraint: %s", self.model.__name__, exc.orig)
            raise ConflictError(self.conflict_message) from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.error("Database error writing %s: %s", self.model.__name__, exc, exc_info=True)
            raise InternalError("Attendance store failure") from exc


class SqlDepartmentRepository(SqlRepository[Department]):
    model = Department
    conflict_message = "Department already exists"

    async def get_by_name(self, name: str) -> Optional[Department]:
        result = await self._session.execute(select(Department).where(Department.name == name))
        return result.scalar_one_or_none()

    async def list_all(self) -> Sequence[Department]:
        result = await self._session.execute(select(Department).order_by(Department.name))
        return list(result.scalars().all())


class SqlDesignationRepository(SqlRepository[Designation]):
    model = Designation
    conflict_message = "Designation already exists"

    async def get_by_name(self, name: str) -> Optional[Designation]:
        result = await self._session.execute(select(Designation).where(Designation.name == name))
        return result.scalar_one_or_none()

    async def list_all(self) -> Sequence[Designation]:
        result = await self._session.execute(
            select(Designation).order_by(Designation.level, Designation.name)
        )
        return list(result.scalars().all())


class SqlEmployeeRepository(SqlRepository[Employee]):
    model = Employee
    conflict_message = "Employee with this email already exists"

    async def get_by_email(self, email: str) -> Optional[Employee]:
        result = await self._session.execute(select(Employee).where(Employee.email == email))
        return result.scalar_one_or_none()

    async def list_all(
        self,
        *,
        department_id: Optional[int] = None,
        designation_id: Optional[int] = None,
        include_inactive: bool = False,
    ) -> Sequence[Employee]:
        query = select(Employee).order_by(Employee.name)
        if department_id is not None:
            query = query.where(Employee.department_id == department_id)
        if designation_id is not None:
            query = query.where(Employee.designation_id == designation_id)
        if not include_inactive:
            query = query.where(Employee.status == "active")
        result = await self._session.execute(query)
        return list(result.scalars().all())

    async def count(
        self,
        *,
        department_id: Optional[int] = None,
        designation_id: Optional[int] = None,
        include_inactive: bool = True,
    ) -> int:
        query = select(func.count(Employee.id))
        if department_id is not None:
            query = query.where(Employee.department_id == department_id)
        if designation_id is not None:
            query = query.where(Employee.designation_id == designation_id)
        if not include_inactive:
            query = query.where(Employee.status == "active")
        result = await self._session.execute(query)
        return result.scalar() or 0


class SqlAttendanceRepository(SqlRepository[Attendance]):
    model = Attendance
    conflict_message = "Attendance for this employee and date already exists"

    async def find(self, employee_id: int, day: date) -> Optional[Attendance]:
        result = await self._session.execute(
            select(Attendance)
            .where(Attendance.employee_id == employee_id, Attendance.date == day)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

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
        query = select(Attendance)
        if employee_id is not None:
            query = query.where(Attendance.employee_id == employee_id)
        if on is not None:
            query = query.where(Attendance.date == on)
        if start is not None:
            query = query.where(Attendance.date >= start)
        if end is not None:
            query = query.where(Attendance.date <= end)
        if status is not None:
            query = query.where(Attendance.status == status)
        if newest_first:
            query = query.order_by(Attendance.date.desc(), Attendance.employee_id)
        else:
            query = query.order_by(Attendance.date, Attendance.employee_id)
        result = await self._session.execute(query)
        return list(result.scalars().all())

    async def count(self, *, on: Optional[date] = None) -> int:
        query = select(func.count(Attendance.id))
        if on is not None:
            query = query.where(Attendance.date == on)
        result = await self._session.execute(query)
        return result.scalar() or 0


class SqlStore:
    """All repositories bound to one request-scoped session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.departments = SqlDepartmentRepository(session)
        self.designations = SqlDesignationRepository(session)
        self.employees = SqlEmployeeRepository(session)
        self.attendance = SqlAttendanceRepository(session)

    async def ping(self) -> bool:
        await self.session.execute(select(1))
        return True
