"""Tests for the two store implementations and the attendance service on top of them."""

from datetime import date, time, timezone

import pytest
from httpx import AsyncClient

from attendance_tracker.core.exceptions import (ConflictError,
                                                InvalidArgumentError,
                                                NotFoundError)
from attendance_tracker.models.attendance import Attendance
from attendance_tracker.models.employee import Employee
from attendance_tracker.models.organization import Department, Designation
from attendance_tracker.repositories.memory import MemoryStore
from attendance_tracker.services.attendance import AttendanceService
from conftest import seed_employee

DAY = date(2025, 3, 10)


@pytest.fixture(params=["sql", "memory"])
async def store(request, sql_store):
    """Run each store test against both backends."""
    if request.param == "sql":
        return sql_store
    return MemoryStore()


async def _employee(store) -> Employee:
    dept = await store.departments.add(Department(name="Engineering", description="", status="active"))
    desig = await store.designations.add(Designation(name="Developer", description="", level=1, status="active"))
    return await store.employees.add(
        Employee(
            name="Ravi",
            email="ravi@example.com",
            phone_number="555",
            department_id=dept.id,
            designation_id=desig.id,
            joining_date=date(2024, 1, 1),
            status="active",
        )
    )


def _attendance(employee_id: int, day: date = DAY) -> Attendance:
    return Attendance(
        employee_id=employee_id,
        date=day,
        check_in_time=None,
        check_out_time=None,
        status="Absent",
        is_late=False,
        late_minutes=0,
        total_hours=0.0,
        remarks="",
    )


# ── Repositories ────────────────────────────────────────────────────
async def test_add_resolves_references(store):
    emp = await _employee(store)
    assert emp.id is not None
    assert emp.department.name == "Engineering"
    assert emp.designation.name == "Developer"

    rec = await store.attendance.add(_attendance(emp.id))
    assert rec.employee.email == "ravi@example.com"
    assert (await store.attendance.find(emp.id, DAY)).id == rec.id
    assert await store.attendance.find(emp.id, date(2025, 3, 11)) is None


async def test_duplicate_employee_day_insert_conflicts(store):
    """The (employee, date) key rejects a second insert instead of duplicating."""
    emp_id = (await _employee(store)).id
    await store.attendance.add(_attendance(emp_id))

    with pytest.raises(ConflictError):
        await store.attendance.add(_attendance(emp_id))

    assert len(await store.attendance.query(employee_id=emp_id)) == 1


async def test_duplicate_department_name_conflicts(store):
    await store.departments.add(Department(name="HR", description="", status="active"))
    with pytest.raises(ConflictError):
        await store.departments.add(Department(name="HR", description="", status="active"))


async def test_query_filters(store):
    emp = await _employee(store)
    for day, status in [(date(2025, 3, 1), "Present"), (date(2025, 3, 2), "Absent"), (date(2025, 4, 1), "Absent")]:
        rec = _attendance(emp.id, day)
        rec.status = status
        await store.attendance.add(rec)

    march = await store.attendance.query(start=date(2025, 3, 1), end=date(2025, 3, 31))
    assert [r.date for r in march] == [date(2025, 3, 1), date(2025, 3, 2)]

    absent = await store.attendance.query(status="Absent", newest_first=True)
    assert [r.date for r in absent] == [date(2025, 4, 1), date(2025, 3, 2)]

    assert await store.attendance.count(on=date(2025, 3, 2)) == 1
    assert await store.employees.count(department_id=emp.department_id) == 1


# ── Service ─────────────────────────────────────────────────────────
async def test_service_remark_updates_single_record(store):
    emp = await _employee(store)
    service = AttendanceService(store)

    first, created = await service.mark_attendance(emp.id, DAY, status="Absent")
    assert created is True
    second, created = await service.mark_attendance(
        emp.id, DAY, check_in_time=time(9, 0), check_out_time=time(11, 30)
    )
    assert created is False
    assert second.id == first.id
    assert second.status == "Half Day"
    assert second.total_hours == 2.5
    assert len(await store.attendance.query(employee_id=emp.id)) == 1


async def test_service_uses_configured_expected_check_in(store):
    emp = await _employee(store)
    service = AttendanceService(store, expected_check_in="10:00")

    rec, _ = await service.mark_attendance(emp.id, DAY, check_in_time=time(9, 45), check_out_time=time(18, 0))
    assert rec.is_late is False

    rec, _ = await service.mark_attendance(emp.id, DAY, check_in_time=time(10, 10))
    assert rec.is_late is True
    assert rec.late_minutes == 10


async def test_service_validates_before_writing(store):
    emp = await _employee(store)
    service = AttendanceService(store)

    with pytest.raises(InvalidArgumentError):
        await service.mark_attendance(None, DAY, status="Present")
    with pytest.raises(InvalidArgumentError):
        await service.mark_attendance(emp.id, None, status="Present")
    with pytest.raises(InvalidArgumentError):
        await service.mark_attendance(emp.id, DAY, status="Vacation")
    with pytest.raises(NotFoundError):
        await service.mark_attendance(9999, DAY, status="Present")

    assert await store.attendance.query() == []


async def test_service_lost_create_race_conflicts(store, monkeypatch):
    """A concurrent first mark that slips past the lookup hits the unique key."""
    emp_id = (await _employee(store)).id
    service = AttendanceService(store)
    await service.mark_attendance(emp_id, DAY, status="Present")

    async def _not_found_yet(employee_id, day):
        return None

    monkeypatch.setattr(store.attendance, "find", _not_found_yet)
    with pytest.raises(ConflictError):
        await service.mark_attendance(emp_id, DAY, status="Absent")

    monkeypatch.undo()
    rows = await store.attendance.query(employee_id=emp_id)
    assert len(rows) == 1
    assert rows[0].status == "Present"


async def test_service_rejects_offset_time_without_touching_record(store):
    emp_id = (await _employee(store)).id
    service = AttendanceService(store)
    await service.mark_attendance(emp_id, DAY, check_in_time=time(9, 0), check_out_time=time(18, 0))

    with pytest.raises(InvalidArgumentError):
        await service.mark_attendance(emp_id, DAY, check_out_time=time(11, 0, tzinfo=timezone.utc))

    stored = await store.attendance.find(emp_id, DAY)
    assert stored.check_out_time == time(18, 0)
    assert stored.status == "Present"


async def test_service_report_validation(store):
    emp = await _employee(store)
    service = AttendanceService(store)

    with pytest.raises(InvalidArgumentError):
        await service.get_monthly_report(emp.id, 1999, 1)
    with pytest.raises(InvalidArgumentError):
        await service.get_monthly_report(emp.id, 2025, 13)
    with pytest.raises(NotFoundError):
        await service.get_monthly_report(9999, 2025, 1)

    report = await service.get_monthly_report(emp.id, 2024, 2)
    assert report["total_days"] == 29
    assert report["month"] == "2024-02"


async def test_service_dashboard_for_given_day(store):
    emp = await _employee(store)
    service = AttendanceService(store)
    await service.mark_attendance(emp.id, DAY, status="Absent")
    await service.mark_attendance(emp.id, date(2025, 3, 4), status="Absent")

    stats = await service.get_dashboard_stats(today=DAY)
    assert [r.employee_id for r in stats["today_absentees"]] == [emp.id]
    assert len(stats["weekly_stats"]) == 7
    assert stats["weekly_stats"]["2025-03-04"]["absent"] == 1


# ── Memory backend end to end ───────────────────────────────────────
async def test_memory_backend_end_to_end(memory_client: AsyncClient):
    emp = await seed_employee(memory_client)
    assert emp["department"]["name"] == "Engineering"

    first = await memory_client.post(
        "/api/v1/attendance/mark",
        json={"employee_id": emp["id"], "date": "2025-03-10", "status": "Absent"},
    )
    assert first.status_code == 201
    second = await memory_client.post(
        "/api/v1/attendance/mark",
        json={"employee_id": emp["id"], "date": "2025-03-10", "check_in_time": "09:20", "check_out_time": "18:30"},
    )
    assert second.status_code == 200
    data = second.json()["data"]
    assert data["id"] == first.json()["data"]["id"]
    assert data["status"] == "Present"
    assert data["late_minutes"] == 20
    assert data["total_hours"] == 9.17

    report = (await memory_client.get(f"/api/v1/attendance/report/{emp['id']}/2025/3")).json()
    assert report["present_days"] == 1
    assert report["late_days"] == 1

    health = (await memory_client.get("/api/v1/health")).json()
    assert health["db"] is True


async def test_memory_backend_conflicts_and_not_found(memory_client: AsyncClient):
    await memory_client.post("/api/v1/departments", json={"name": "HR"})
    dup = await memory_client.post("/api/v1/departments", json={"name": "HR"})
    assert dup.status_code == 409

    missing = await memory_client.get("/api/v1/employees/42")
    assert missing.status_code == 404
    assert missing.json()["success"] is False
