from fastapi import APIRouter, Depends, status

from app.api.deps import get_repository
from app.api.schemas.appointment import BookAppointmentRequest, UpdateAppointmentRequest
from app.models.appointment import AppointmentPublic
from app.services import appointment_service
from app.services.appointment_service import to_public
from app.services.repository import ScheduleRepository
from app.services.time_utils import parse_date

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.post("", response_model=AppointmentPublic, status_code=status.HTTP_201_CREATED)
async def book_appointment(
    body: BookAppointmentRequest,
    repo: ScheduleRepository = Depends(get_repository),
) -> AppointmentPublic:
    """Book if the time is still offered for the service; 409 otherwise."""
    appointment = await appointment_service.create_appointment(repo, body)
    return to_public(appointment)


@router.get("/date/{date}", response_model=list[AppointmentPublic])
async def list_for_date(
    date: str,
    repo: ScheduleRepository = Depends(get_repository),
) -> list[AppointmentPublic]:
    appointments = await appointment_service.list_appointments_for_date(repo, parse_date(date))
    return [to_public(a) for a in appointments]


@router.get("/today", response_model=list[AppointmentPublic])
async def list_for_today(repo: ScheduleRepository = Depends(get_repository)) -> list[AppointmentPublic]:
    appointments = await appointment_service.list_appointments_for_today(repo)
    return [to_public(a) for a in appointments]


@router.get("/tutor/{rut}", response_model=list[AppointmentPublic])
async def list_for_tutor(
    rut: str,
    repo: ScheduleRepository = Depends(get_repository),
) -> list[AppointmentPublic]:
    """Accepts the RUT with or without dots and dash."""
    appointments = await appointment_service.list_appointments_for_tutor(repo, rut)
    return [to_public(a) for a in appointments]


# Registered after /date/{date} and /tutor/{rut}, which would otherwise match as a year
@router.get("/{year}/{month}", response_model=list[AppointmentPublic])
async def list_for_month(
    year: int,
    month: int,
    repo: ScheduleRepository = Depends(get_repository),
) -> list[AppointmentPublic]:
    """Calendar view: the month's appointments ordered by date and time."""
    appointments = await appointment_service.list_appointments_for_month(repo, year, month)
    return [to_public(a) for a in appointments]


@router.patch("/{appointment_id}/cancel", response_model=AppointmentPublic)
async def cancel(
    appointment_id: str,
    repo: ScheduleRepository = Depends(get_repository),
) -> AppointmentPublic:
    return to_public(await appointment_service.cancel_appointment(repo, appointment_id))


@router.patch("/{appointment_id}", response_model=AppointmentPublic)
async def update(
    appointment_id: str,
    body: UpdateAppointmentRequest,
    repo: ScheduleRepository = Depends(get_repository),
) -> AppointmentPublic:
    return to_public(await appointment_service.update_appointment(repo, appointment_id, body))


@router.delete("/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete(
    appointment_id: str,
    repo: ScheduleRepository = Depends(get_repository),
) -> None:
    """Only cancelled appointments can be deleted."""
    await appointment_service.delete_appointment(repo, appointment_id)
