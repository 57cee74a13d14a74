import calendar
import logging
from datetime import date

from app.api.schemas.appointment import BookAppointmentRequest, UpdateAppointmentRequest
from app.core.exceptions import InputError, InvalidOperationError, NotFoundError, SlotUnavailableError
from app.models.appointment import Appointment, AppointmentPublic
from app.models.common import utc_naive_now
from app.services.availability import STATUS_CANCELLED, STATUS_SCHEDULED
from app.services.repository import ScheduleRepository
from app.services.rut import clean_rut
from app.services.service_catalog import get_service_duration
from app.services.slot_service import get_available_slots

logger = logging.getLogger(__name__)


def to_public(a: Appointment) -> AppointmentPublic:
    return AppointmentPublic(
        **a.model_dump(exclude={"id", "status", "created_at", "updated_at"}),
        id=a.id,
        status=a.status,
        duration_minutes=get_service_duration(a.service_type),
        created_at=a.created_at,
        updated_at=a.updated_at,
    )


async def _ensure_offered(
    repo: ScheduleRepository,
    appointment_date: date,
    appointment_time: str,
    service_type: str,
    exclude_appointment_id: str | None = None,
) -> None:
    # Availability is advisory; the unique index in the store is the final guard.
    slots = await get_available_slots(repo, appointment_date, service_type, exclude_appointment_id)
    if appointment_time not in slots:
        raise SlotUnavailableError(
            f"{appointment_date} {appointment_time} is not available for {service_type}"
        )


async def get_appointment(repo: ScheduleRepository, appointment_id: str) -> Appointment:
    appointment = await repo.get(Appointment, appointment_id)
    if not appointment:
        raise NotFoundError("Appointment not found")
    return appointment


async def create_appointment(repo: ScheduleRepository, data: BookAppointmentRequest) -> Appointment:
    await _ensure_offered(repo, data.appointment_date, data.appointment_time, data.service_type)
    appointment = Appointment(**data.model_dump(), status=STATUS_SCHEDULED)
    appointment = await repo.add(appointment)
    logger.info(
        "Booked appointment %s on %s at %s (%s)",
        appointment.id,
        appointment.appointment_date,
        appointment.appointment_time,
        appointment.service_type,
    )
    return appointment


async def list_appointments_for_date(repo: ScheduleRepository, appointment_date: date) -> list[Appointment]:
    return await repo.list_appointments(appointment_date)


async def list_appointments_for_today(repo: ScheduleRepository) -> list[Appointment]:
    # Clinic wall-clock date
    return await repo.list_appointments(date.today())


async def list_appointments_for_month(repo: ScheduleRepository, year: int, month: int) -> list[Appointment]:
    """Every appointment in the calendar month, cancelled ones included."""
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        raise InputError(f"Invalid month {year}-{month}")
    last_day = calendar.monthrange(year, month)[1]
    return await repo.list_appointments_between(date(year, month, 1), date(year, month, last_day))


async def list_appointments_for_tutor(repo: ScheduleRepository, rut: str) -> list[Appointment]:
    return await repo.list_appointments_for_tutor(clean_rut(rut))


async def update_appointment(
    repo: ScheduleRepository, appointment_id: str, data: UpdateAppointmentRequest
) -> Appointment:
    """Apply a partial update. Moving a scheduled appointment re-checks the
    new time with the appointment itself excluded from conflicts."""
    appointment = await get_appointment(repo, appointment_id)
    changes = data.model_dump(exclude_unset=True)

    new_date = changes.get("appointment_date", appointment.appointment_date)
    new_time = changes.get("appointment_time", appointment.appointment_time)
    new_service = changes.get("service_type", appointment.service_type)
    new_status = changes.get("status", appointment.status)
    moved = (
        new_date != appointment.appointment_date
        or new_time != appointment.appointment_time
        or new_service != appointment.service_type
        or (appointment.status == STATUS_CANCELLED and new_status == STATUS_SCHEDULED)
    )
    if moved and new_status == STATUS_SCHEDULED:
        await _ensure_offered(repo, new_date, new_time, new_service, exclude_appointment_id=appointment.id)

    for key, value in changes.items():
        setattr(appointment, key, value)
    appointment.updated_at = utc_naive_now()
    appointment = await repo.save(appointment)
    if moved:
        logger.info("Rescheduled appointment %s to %s %s", appointment.id, new_date, new_time)
    return appointment


async def cancel_appointment(repo: ScheduleRepository, appointment_id: str) -> Appointment:
    appointment = await get_appointment(repo, appointment_id)
    appointment.status = STATUS_CANCELLED
    appointment.updated_at = utc_naive_now()
    appointment = await repo.save(appointment)
    logger.info("Cancelled appointment %s", appointment.id)
    return appointment


async def delete_appointment(repo: ScheduleRepository, appointment_id: str) -> Appointment:
    appointment = await get_appointment(repo, appointment_id)
    if appointment.status != STATUS_CANCELLED:
        raise InvalidOperationError("Only cancelled appointments can be deleted")
    await repo.delete(appointment)
    return appointment
