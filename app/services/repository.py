import logging
from datetime import date
from typing import Protocol, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from app.core.exceptions import CollaboratorError, InvalidOperationError, SlotUnavailableError
from app.models.appointment import LIVE_SLOT_INDEX, Appointment
from app.models.schedule_block import ScheduleBlock
from app.models.working_hours import WorkingHours

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", bound=SQLModel)


class ScheduleRepository(Protocol):
    """Single store for working hours, date blocks and appointments.

    Implementations raise CollaboratorError when the backing store fails and
    SlotUnavailableError when a write would create a second live booking at the
    same date and time. Other constraint violations raise InvalidOperationError.
    An empty list always means "no rows".
    """

    async def list_active_working_windows(self, day_of_week: int | None = None) -> list[WorkingHours]: ...

    async def list_active_date_blocks(self, block_date: date | None = None) -> list[ScheduleBlock]: ...

    async def list_appointments(self, appointment_date: date) -> list[Appointment]: ...

    async def list_appointments_between(self, start: date, end: date) -> list[Appointment]: ...

    async def list_appointments_for_tutor(self, tutor_rut: str) -> list[Appointment]: ...

    async def get(self, model: type[RowT], row_id: str) -> RowT | None: ...

    async def add(self, row: RowT) -> RowT: ...

    async def save(self, row: RowT) -> RowT: ...

    async def delete(self, row: SQLModel) -> None: ...


class SqlScheduleRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _all(self, stmt) -> list:
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logger.exception("Schedule store query failed: %s", e)
            raise CollaboratorError("Schedule store is unavailable") from e
        return list(result.scalars().all())

    async def list_active_working_windows(self, day_of_week: int | None = None) -> list[WorkingHours]:
        q = select(WorkingHours).where(WorkingHours.is_active == True)  # noqa: E712
        if day_of_week is not None:
            q = q.where(WorkingHours.day_of_week == day_of_week)
        return await self._all(q.order_by(WorkingHours.day_of_week, WorkingHours.start_time))

    async def list_active_date_blocks(self, block_date: date | None = None) -> list[ScheduleBlock]:
        q = select(ScheduleBlock).where(ScheduleBlock.is_active == True)  # noqa: E712
        if block_date is not None:
            q = q.where(ScheduleBlock.block_date == block_date)
        return await self._all(q.order_by(ScheduleBlock.block_date, ScheduleBlock.start_time))

    async def list_appointments(self, appointment_date: date) -> list[Appointment]:
        q = (
            select(Appointment)
            .where(Appointment.appointment_date == appointment_date)
            .order_by(Appointment.appointment_time)
        )
        return await self._all(q)

    async def list_appointments_between(self, start: date, end: date) -> list[Appointment]:
        q = (
            select(Appointment)
            .where(Appointment.appointment_date >= start, Appointment.appointment_date <= end)
            .order_by(Appointment.appointment_date, Appointment.appointment_time)
        )
        return await self._all(q)

    async def list_appointments_for_tutor(self, tutor_rut: str) -> list[Appointment]:
        q = (
            select(Appointment)
            .where(Appointment.tutor_rut == tutor_rut)
            .order_by(Appointment.appointment_date, Appointment.appointment_time)
        )
        return await self._all(q)

    async def get(self, model: type[RowT], row_id: str) -> RowT | None:
        try:
            return await self.session.get(model, row_id)
        except SQLAlchemyError as e:
            logger.exception("Schedule store lookup failed: %s", e)
            raise CollaboratorError("Schedule store is unavailable") from e

    async def _flush(self, row: RowT) -> RowT:
        try:
            await self.session.flush()
            await self.session.refresh(row)
        except IntegrityError as e:
            await self.session.rollback()
            if isinstance(row, Appointment) and LIVE_SLOT_INDEX in str(e.orig):
                raise SlotUnavailableError(
                    f"{row.appointment_date} {row.appointment_time} is already booked"
                ) from e
            logger.warning("Rejected %s write: %s", type(row).__name__, e.orig)
            raise InvalidOperationError(f"Could not store {type(row).__name__}: {e.orig}") from e
        except SQLAlchemyError as e:
            logger.exception("Schedule store write failed: %s", e)
            raise CollaboratorError("Schedule store is unavailable") from e
        return row

    async def add(self, row: RowT) -> RowT:
        self.session.add(row)
        return await self._flush(row)

    async def save(self, row: RowT) -> RowT:
        self.session.add(row)
        return await self._flush(row)

    async def delete(self, row: SQLModel) -> None:
        try:
            await self.session.delete(row)
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.exception("Schedule store delete failed: %s", e)
            raise CollaboratorError("Schedule store is unavailable") from e
