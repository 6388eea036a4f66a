"""
FastAPI dependencies — store selection and the attendance service.

The storage backend is picked here and nowhere else: ``database`` opens a
session per request, ``memory`` hands out the process-wide store.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from attendance_tracker.core.config import settings
from attendance_tracker.db.session import async_session_factory
from attendance_tracker.repositories.base import Store
from attendance_tracker.repositories.memory import MemoryStore
from attendance_tracker.repositories.sql import SqlStore
from attendance_tracker.services.attendance import AttendanceService

_memory_store: MemoryStore | None = None


def get_memory_store() -> MemoryStore:
    global _memory_store
    if _memory_store is None:
        _memory_store = MemoryStore()
    return _memory_store


# ── Database session ────────────────────────────────────────────────
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


# ── Store / service ─────────────────────────────────────────────────
async def get_store() -> AsyncGenerator[Store, None]:
    if settings.STORAGE_BACKEND == "memory":
        yield get_memory_store()
        return
    async for session in get_db():
        yield SqlStore(session)


def get_attendance_service(store: Store = Depends(get_store)) -> AttendanceService:
    return AttendanceService(store, expected_check_in=settings.EXPECTED_CHECK_IN)
