"""
Shared test fixtures for the Attendance Tracker test suite.

Every test gets a fresh in-memory SQLite database (aiosqlite + StaticPool)
and an httpx AsyncClient wired to the app with the store dependency
overridden.
"""

import os
import sys
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["STORAGE_BACKEND"] = "database"
os.environ["EXPECTED_CHECK_IN"] = "09:00"
os.environ["CORS_ORIGINS"] = "http://localhost,http://test"

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from attendance_tracker.api.v1.deps import get_store
from attendance_tracker.db.base import Base
from attendance_tracker.main import app
from attendance_tracker.repositories.memory import MemoryStore
from attendance_tracker.repositories.sql import SqlStore


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create all tables on a private in-memory database, drop it afterwards."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def sql_store(session_factory) -> AsyncGenerator[SqlStore, None]:
    """A SqlStore on its own session, for direct repository / service tests."""
    async with session_factory() as session:
        yield SqlStore(session)


@pytest.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app (SQL store)."""

    async def _override_get_store():
        async with session_factory() as session:
            yield SqlStore(session)

    app.dependency_overrides[get_store] = _override_get_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def memory_client() -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app with a fresh in-memory store."""
    store = MemoryStore()
    app.dependency_overrides[get_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# ── Seed helpers ────────────────────────────────────────────────────
async def seed_employee(
    client: AsyncClient,
    *,
    name: str = "Asha Verma",
    email: str = "asha@example.com",
    department: str = "Engineering",
    designation: str = "Developer",
) -> dict:
    """Create a department, a designation and one employee; return the employee JSON."""
    dept = await client.post("/api/v1/departments", json={"name": department})
    desig = await client.post("/api/v1/designations", json={"name": designation, "level": 2})
    resp = await client.post(
        "/api/v1/employees",
        json={
            "name": name,
            "email": email,
            "phone_number": "+971500000001",
            "department_id": dept.json()["id"],
            "designation_id": desig.json()["id"],
            "joining_date": "2024-01-15",
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
async def employee(async_client: AsyncClient) -> dict:
    return await seed_employee(async_client)
