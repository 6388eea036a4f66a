"""
Employee CRUD.

DELETE is a soft-delete (status → inactive) so attendance history stays
attached to a real employee row.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from attendance_tracker.api.v1.deps import get_store
from attendance_tracker.core.enums import RecordStatus
from attendance_tracker.core.exceptions import ConflictError, NotFoundError
from attendance_tracker.models.employee import Employee
from attendance_tracker.repositories.base import Store
from attendance_tracker.schemas.organization import (DeleteResponse,
                                                     EmployeeCreate,
                                                     EmployeeRead,
                                                     EmployeeUpdate)

router = APIRouter(tags=["employees"])
logger = logging.getLogger(__name__)


async def _check_references(
    store: Store, department_id: int | None, designation_id: int | None
) -> None:
    if department_id is not None and await store.departments.get(department_id) is None:
        raise NotFoundError("Department not found")
    if designation_id is not None and await store.designations.get(designation_id) is None:
        raise NotFoundError("Designation not found")


async def _get_employee(store: Store, employee_id: int) -> Employee:
    employee = await store.employees.get(employee_id)
    if employee is None:
        raise NotFoundError("Employee not found")
    return employee


@router.get("/employees", response_model=list[EmployeeRead])
async def list_employees(
    department_id: int | None = None,
    designation_id: int | None = None,
    include_inactive: bool = False,
    store: Store = Depends(get_store),
) -> list[Employee]:
    return list(
        await store.employees.list_all(
            department_id=department_id,
            designation_id=designation_id,
            include_inactive=include_inactive,
        )
    )


@router.post("/employees", response_model=EmployeeRead, status_code=201)
async def create_employee(
    body: EmployeeCreate,
    store: Store = Depends(get_store),
) -> Employee:
    await _check_references(store, body.department_id, body.designation_id)
    if await store.employees.get_by_email(body.email):
        raise ConflictError("Employee with this email already exists")

    employee = await store.employees.add(Employee(**body.model_dump()))
    logger.info("Created employee %s (%s)", employee.name, employee.email)
    return employee


@router.get("/employees/{employee_id}", response_model=EmployeeRead)
async def get_employee(
    employee_id: int,
    store: Store = Depends(get_store),
) -> Employee:
    return await _get_employee(store, employee_id)


@router.put("/employees/{employee_id}", response_model=EmployeeRead)
async def update_employee(
    employee_id: int,
    body: EmployeeUpdate,
    store: Store = Depends(get_store),
) -> Employee:
    employee = await _get_employee(store, employee_id)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)

    await _check_references(store, changes.get("department_id"), changes.get("designation_id"))
    if "email" in changes and changes["email"] != employee.email:
        if await store.employees.get_by_email(changes["email"]):
            raise ConflictError("Employee with this email already exists")

    for field, value in changes.items():
        setattr(employee, field, value)
    employee = await store.employees.save(employee)
    logger.info("Updated employee %d", employee_id)
    return employee


@router.delete("/employees/{employee_id}", response_model=DeleteResponse)
async def delete_employee(
    employee_id: int,
    store: Store = Depends(get_store),
) -> DeleteResponse:
    """Soft-delete (deactivate) an employee. Attendance history is preserved."""
    employee = await _get_employee(store, employee_id)

    employee.status = RecordStatus.INACTIVE.value
    await store.employees.save(employee)
    logger.info("Soft-deleted employee %d (%s)", employee_id, employee.name)
    return DeleteResponse(success=True, message=f"Employee '{employee.name}' deactivated")
