from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel

from app.core.exceptions import SlotUnavailableError
from app.main import app
from app.api.deps import get_repository
from app.models.appointment import Appointment
from app.models.schedule_block import ScheduleBlock
from app.models.working_hours import WorkingHours
from app.services.availability import STATUS_CANCELLED

# 2025-03-03 is a Monday (day_of_week 1), 2025-03-02 a Sunday (0)
MONDAY = date(2025, 3, 3)
SUNDAY = date(2025, 3, 2)


class InMemoryScheduleRepository:
    """Dict-backed stand-in for SqlScheduleRepository.

    Mirrors the live-slot unique index: a second non-cancelled appointment at
    the same date and time raises SlotUnavailableError on add/save.
    """

    def __init__(self) -> None:
        self.rows: dict[type, dict[str, SQLModel]] = {WorkingHours: {}, ScheduleBlock: {}, Appointment: {}}
        self.fail_with: Exception | None = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def _check_unique(self, row: SQLModel) -> None:
        if not isinstance(row, Appointment) or row.status == STATUS_CANCELLED:
            return
        for other in self.rows[Appointment].values():
            if (
                other.id != row.id
                and other.status != STATUS_CANCELLED
                and other.appointment_date == row.appointment_date
                and other.appointment_time == row.appointment_time
            ):
                raise SlotUnavailableError(f"{row.appointment_date} {row.appointment_time} is already booked")

    async def list_active_working_windows(self, day_of_week: int | None = None) -> list[WorkingHours]:
        self._check()
        rows = [
            r for r in self.rows[WorkingHours].values()
            if r.is_active and (day_of_week is None or r.day_of_week == day_of_week)
        ]
        return sorted(rows, key=lambda r: (r.day_of_week, r.start_time))

    async def list_active_date_blocks(self, block_date: date | None = None) -> list[ScheduleBlock]:
        self._check()
        rows = [
            r for r in self.rows[ScheduleBlock].values()
            if r.is_active and (block_date is None or r.block_date == block_date)
        ]
        return sorted(rows, key=lambda r: (r.block_date, r.start_time or ""))

    async def list_appointments(self, appointment_date: date) -> list[Appointment]:
        self._check()
        rows = [r for r in self.rows[Appointment].values() if r.appointment_date == appointment_date]
        return sorted(rows, key=lambda r: r.appointment_time)

    async def list_appointments_between(self, start: date, end: date) -> list[Appointment]:
        self._check()
        rows = [r for r in self.rows[Appointment].values() if start <= r.appointment_date <= end]
        return sorted(rows, key=lambda r: (r.appointment_date, r.appointment_time))

    async def list_appointments_for_tutor(self, tutor_rut: str) -> list[Appointment]:
        self._check()
        rows = [r for r in self.rows[Appointment].values() if r.tutor_rut == tutor_rut]
        return sorted(rows, key=lambda r: (r.appointment_date, r.appointment_time))

    async def get(self, model, row_id):
        self._check()
        return self.rows[model].get(row_id)

    async def add(self, row):
        self._check()
        self._check_unique(row)
        self.rows[type(row)][row.id] = row
        return row

    async def save(self, row):
        return await self.add(row)

    async def delete(self, row) -> None:
        self._check()
        self.rows[type(row)].pop(row.id, None)

    # Seeding helpers, synchronous for test setup
    def window(self, day_of_week: int, start: str, end: str, is_active: bool = True) -> WorkingHours:
        row = WorkingHours(day_of_week=day_of_week, start_time=start, end_time=end, is_active=is_active)
        self.rows[WorkingHours][row.id] = row
        return row

    def block(
        self, block_date: date, start: str | None = None, end: str | None = None, is_active: bool = True
    ) -> ScheduleBlock:
        row = ScheduleBlock(
            block_date=block_date, start_time=start, end_time=end, reason="test", is_active=is_active
        )
        self.rows[ScheduleBlock][row.id] = row
        return row

    def appointment(
        self,
        appointment_date: date,
        time: str,
        service_type: str = "Vacunación",
        status: str = "scheduled",
        tutor_rut: str = "111111111",
    ) -> Appointment:
        row = Appointment(
            appointment_date=appointment_date,
            appointment_time=time,
            service_type=service_type,
            status=status,
            pet_name="Firulais",
            tutor_rut=tutor_rut,
            tutor_name="Ana Pérez",
            tutor_phone="+56911111111",
            address="Av. Siempre Viva 742, Providencia, Santiago",
        )
        self.rows[Appointment][row.id] = row
        return row


@pytest.fixture
def repo() -> InMemoryScheduleRepository:
    return InMemoryScheduleRepository()


@pytest.fixture
def client(repo: InMemoryScheduleRepository):
    app.dependency_overrides[get_repository] = lambda: repo
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
