"""
Department and designation CRUD.

Both are simple named entities with a unique name; neither can be deleted
while employees are still assigned to it.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from attendance_tracker.api.v1.deps import get_store
from attendance_tracker.core.exceptions import ConflictError, NotFoundError
from attendance_tracker.models.organization import Department, Designation
from attendance_tracker.repositories.base import Store
from attendance_tracker.schemas.organization import (DeleteResponse,
                                                     DepartmentCreate,
                                                     DepartmentRead,
                                                     DepartmentUpdate,
                                                     DesignationCreate,
                                                     DesignationRead,
                                                     DesignationUpdate)

router = APIRouter(tags=["organization"])
logger = logging.getLogger(__name__)


# ── Departments ─────────────────────────────────────────────────────
async def _get_department(store: Store, department_id: int) -> Department:
    department = await store.departments.get(department_id)
    if department is None:
        raise NotFoundError("Department not found")
    return department


@router.get("/departments", response_model=list[DepartmentRead])
async def list_departments(store: Store = Depends(get_store)) -> list[Department]:
    return list(await store.departments.list_all())


@router.post("/departments", response_model=DepartmentRead, status_code=201)
async def create_department(
    body: DepartmentCreate,
    store: Store = Depends(get_store),
) -> Department:
    if await store.departments.get_by_name(body.name):
        raise ConflictError("Department already exists")

    department = await store.departments.add(Department(**body.model_dump()))
    logger.info("Created department %s", department.name)
    return department


@router.get("/departments/{department_id}", response_model=DepartmentRead)
async def get_department(
    department_id: int,
    store: Store = Depends(get_store),
) -> Department:
    return await _get_department(store, department_id)


@router.put("/departments/{department_id}", response_model=DepartmentRead)
async def update_department(
    department_id: int,
    body: DepartmentUpdate,
    store: Store = Depends(get_store),
) -> Department:
    department = await _get_department(store, department_id)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)

    if "name" in changes and changes["name"] != department.name:
        if await store.departments.get_by_name(changes["name"]):
            raise ConflictError("Department with this name already exists")

    for field, value in changes.items():
        setattr(department, field, value)
    department = await store.departments.save(department)
    logger.info("Updated department %d", department_id)
    return department


@router.delete("/departments/{department_id}", response_model=DeleteResponse)
async def delete_department(
    department_id: int,
    store: Store = Depends(get_store),
) -> DeleteResponse:
    department = await _get_department(store, department_id)
    assigned = await store.employees.count(department_id=department_id)
    if assigned:
        raise ConflictError(f"Department is assigned to {assigned} employee(s)")

    await store.departments.delete(department)
    logger.info("Deleted department %d (%s)", department_id, department.name)
    return DeleteResponse(success=True, message=f"Department '{department.name}' deleted")


# ── Designations ────────────────────────────────────────────────────
async def _get_designation(store: Store, designation_id: int) -> Designation:
    designation = await store.designations.get(designation_id)
    if designation is None:
        raise NotFoundError("Designation not found")
    return designation


@router.get("/designations", response_model=list[DesignationRead])
async def list_designations(store: Store = Depends(get_store)) -> list[Designation]:
    return list(await store.designations.list_all())


@router.post("/designations", response_model=DesignationRead, status_code=201)
async def create_designation(
    body: DesignationCreate,
    store: Store = Depends(get_store),
) -> Designation:
    if await store.designations.get_by_name(body.name):
        raise ConflictError("Designation already exists")

    designation = await store.designations.add(Designation(**body.model_dump()))
    logger.info("Created designation %s (level %d)", designation.name, designation.level)
    return designation


@router.get("/designations/{designation_id}", response_model=DesignationRead)
async def get_designation(
    designation_id: int,
    store: Store = Depends(get_store),
) -> Designation:
    return await _get_designation(store, designation_id)


@router.put("/designations/{designation_id}", response_model=DesignationRead)
async def update_designation(
    designation_id: int,
    body: DesignationUpdate,
    store: Store = Depends(get_store),
) -> Designation:
    designation = await _get_designation(store, designation_id)
    changes = body.model_dump(exclude_unset=True, exclude_none=True)

    if "name" in changes and changes["name"] != designation.name:
        if await store.designations.get_by_name(changes["name"]):
            raise ConflictError("Designation with this name already exists")

    for field, value in changes.items():
        setattr(designation, field, value)
    designation = await store.designations.save(designation)
    logger.info("Updated designation %d", designation_id)
    return designation


@router.delete("/designations/{designation_id}", response_model=DeleteResponse)
async def delete_designation(
    designation_id: int,
    store: Store = Depends(get_store),
) -> DeleteResponse:
    designation = await _get_designation(store, designation_id)
    assigned = await store.employees.count(designation_id=designation_id)
    if assigned:
        raise ConflictError(f"Designation is assigned to {assigned} employee(s)")

    await store.designations.delete(designation)
    logger.info("Deleted designation %d (%s)", designation_id, designation.name)
    return DeleteResponse(success=True, message=f"Designation '{designation.name}' deleted")
