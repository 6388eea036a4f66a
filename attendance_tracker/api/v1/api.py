"""
V1 API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from attendance_tracker.api.v1.endpoints import (attendance, departments,
                                                 employees, system)

api_router = APIRouter()

# Departments & designations
api_router.include_router(departments.router)

# Employees
api_router.include_router(employees.router)

# Mark, listings, dashboard, monthly report
api_router.include_router(attendance.router)

# Health, status
api_router.include_router(system.router)
