"""Tests for the dashboard and the monthly per-employee report."""

from datetime import date, timedelta

import pytest
from httpx import AsyncClient

from conftest import seed_employee

MARK = "/api/v1/attendance/mark"


async def _mark(client: AsyncClient, employee_id: int, day: str, **fields):
    resp = await client.post(MARK, json={"employee_id": employee_id, "date": day, **fields})
    assert resp.status_code in (200, 201), resp.text
    return resp.json()["data"]


# ── Dashboard ───────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_dashboard_empty_has_seven_zero_days(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/attendance/dashboard")
    assert resp.status_code == 200
    data = resp.json()
    assert data["today_absentees"] == []

    today = date.today()
    expected_keys = [(today - timedelta(days=i)).isoformat() for i in range(7)]
    assert list(data["weekly_stats"]) == expected_keys
    for counts in data["weekly_stats"].values():
        assert counts == {"absent": 0, "present": 0, "half_day": 0}


@pytest.mark.asyncio
async def test_dashboard_counts_and_absentees(async_client: AsyncClient):
    alice = await seed_employee(async_client, name="Alice", email="alice@example.com")
    bob = await seed_employee(
        async_client, name="Bob", email="bob@example.com", department="Sales", designation="Manager"
    )
    today = date.today()
    yesterday = (today - timedelta(days=1)).isoformat()
    old = (today - timedelta(days=7)).isoformat()

    await _mark(async_client, alice["id"], today.isoformat(), status="Absent")
    await _mark(async_client, bob["id"], today.isoformat(), check_in_time="09:00", check_out_time="18:00")
    await _mark(async_client, alice["id"], yesterday, check_in_time="09:00", check_out_time="11:30")
    await _mark(async_client, bob["id"], yesterday, status="Leave")
    await _mark(async_client, bob["id"], old, status="Absent")

    data = (await async_client.get("/api/v1/attendance/dashboard")).json()

    assert len(data["today_absentees"]) == 1
    absentee = data["today_absentees"][0]
    assert absentee["employee"]["name"] == "Alice"
    assert absentee["employee"]["department"]["name"] == "Engineering"
    assert absentee["employee"]["designation"]["name"] == "Developer"

    stats = data["weekly_stats"]
    assert len(stats) == 7
    assert stats[today.isoformat()] == {"absent": 1, "present": 1, "half_day": 0}
    assert stats[yesterday] == {"absent": 0, "present": 0, "half_day": 1}
    assert old not in stats


# ── Monthly report ──────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_monthly_report_totals(async_client: AsyncClient, employee: dict):
    eid = employee["id"]
    await _mark(async_client, eid, "2025-03-03", check_in_time="08:45", check_out_time="18:00")
    await _mark(async_client, eid, "2025-03-04", check_in_time="09:20", check_out_time="18:30")
    await _mark(async_client, eid, "2025-03-05", check_in_time="09:00", check_out_time="11:00")
    await _mark(async_client, eid, "2025-03-06", status="Absent")
    await _mark(async_client, eid, "2025-03-07", status="Holiday")
    # Outside the month
    await _mark(async_client, eid, "2025-04-01", check_in_time="10:00", check_out_time="18:00")

    resp = await async_client.get(f"/api/v1/attendance/report/{eid}/2025/3")
    assert resp.status_code == 200
    report = resp.json()
    assert report["month"] == "2025-03"
    assert report["employee"]["id"] == eid
    assert report["employee"]["department"]["name"] == "Engineering"
    assert report["total_days"] == 31
    assert report["present_days"] == 2
    assert report["absent_days"] == 1
    assert report["half_days"] == 1
    assert report["late_days"] == 1
    assert report["total_late_minutes"] == 20
    assert report["total_hours_worked"] == 20.42
    assert report["attendance_rate"] == 6.45
    assert [d["date"] for d in report["details"]] == [
        "2025-03-03", "2025-03-04", "2025-03-05", "2025-03-06", "2025-03-07",
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("year, month, days", [(2024, 2, 29), (2025, 2, 28), (2025, 6, 30)])
async def test_monthly_report_total_days_without_records(
    async_client: AsyncClient, employee: dict, year: int, month: int, days: int
):
    resp = await async_client.get(f"/api/v1/attendance/report/{employee['id']}/{year}/{month}")
    report = resp.json()
    assert report["total_days"] == days
    assert report["details"] == []
    assert report["attendance_rate"] == 0.0
    assert report["total_hours_worked"] == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("year, month", [(1999, 5), (2101, 5), (2025, 0), (2025, 13)])
async def test_monthly_report_rejects_out_of_range(
    async_client: AsyncClient, employee: dict, year: int, month: int
):
    resp = await async_client.get(f"/api/v1/attendance/report/{employee['id']}/{year}/{month}")
    assert resp.status_code == 400
    assert resp.json()["success"] is False


@pytest.mark.asyncio
async def test_monthly_report_unknown_employee(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/attendance/report/9999/2025/3")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Employee not found"


# ── Health / Status ────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_health_endpoint(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/health")
    assert resp.status_code == 200
    assert resp.json() == {"db": True, "backend": "database"}


@pytest.mark.asyncio
async def test_status_endpoint(async_client: AsyncClient, employee: dict):
    await _mark(async_client, employee["id"], date.today().isoformat(), status="Present")
    resp = await async_client.get("/api/v1/status")
    assert resp.status_code == 200
    data = resp.json()
    assert data["total_employees"] == 1
    assert data["today_marked"] == 1
