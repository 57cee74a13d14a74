from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_repository
from app.api.schemas.schedule import (
    BulkScheduleRequest,
    BulkScheduleResponse,
    BulkScheduleResult,
    IsBlockedResponse,
    ScheduleBlockCreateRequest,
    ScheduleBlockUpdateRequest,
    ServiceTypeInfo,
    WorkingHoursCreateRequest,
    WorkingHoursUpdateRequest,
)
from app.models.schedule_block import ScheduleBlockPublic
from app.models.working_hours import WorkingHoursPublic
from app.services import schedule_service
from app.services.repository import ScheduleRepository
from app.services.service_catalog import get_service_color, get_service_duration, get_service_names
from app.services.slot_service import get_available_slots, is_date_fully_blocked

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.get("/availability/{date}", response_model=list[str])
async def availability(
    date: str,
    service_type: str | None = Query(None, alias="serviceType"),
    editing_appointment: str | None = Query(None, alias="editingAppointment"),
    repo: ScheduleRepository = Depends(get_repository),
) -> list[str]:
    """Bookable HH:MM start times for the date. An empty list means no capacity;
    store failures are reported as 503, never as an empty list."""
    return await get_available_slots(
        repo, date, service_type=service_type or None, exclude_appointment_id=editing_appointment or None
    )


@router.get("/is-blocked/{date}", response_model=IsBlockedResponse)
async def is_blocked(
    date: str,
    repo: ScheduleRepository = Depends(get_repository),
) -> IsBlockedResponse:
    return IsBlockedResponse(is_blocked=await is_date_fully_blocked(repo, date))


@router.get("/services", response_model=list[ServiceTypeInfo])
async def list_services() -> list[ServiceTypeInfo]:
    return [
        ServiceTypeInfo(name=name, duration=get_service_duration(name), color=get_service_color(name))
        for name in get_service_names()
    ]


# --- Weekly working hours ---

@router.get("/veterinary", response_model=list[WorkingHoursPublic])
async def list_working_hours(repo: ScheduleRepository = Depends(get_repository)):
    return await schedule_service.list_working_hours(repo)


@router.post("/veterinary", response_model=WorkingHoursPublic, status_code=status.HTTP_201_CREATED)
async def create_working_hours(
    body: WorkingHoursCreateRequest,
    repo: ScheduleRepository = Depends(get_repository),
):
    return await schedule_service.create_working_hours(repo, body)


@router.put("/veterinary/{hours_id}", response_model=WorkingHoursPublic)
async def update_working_hours(
    hours_id: str,
    body: WorkingHoursUpdateRequest,
    repo: ScheduleRepository = Depends(get_repository),
):
    return await schedule_service.update_working_hours(repo, hours_id, body)


# --- Date blocks ---

@router.get("/blocks", response_model=list[ScheduleBlockPublic])
async def list_blocks(repo: ScheduleRepository = Depends(get_repository)):
    return await schedule_service.list_schedule_blocks(repo)


@router.post("/blocks", response_model=ScheduleBlockPublic, status_code=status.HTTP_201_CREATED)
async def create_block(
    body: ScheduleBlockCreateRequest,
    repo: ScheduleRepository = Depends(get_repository),
):
    return await schedule_service.create_schedule_block(repo, body)


@router.put("/blocks/{block_id}", response_model=ScheduleBlockPublic)
async def update_block(
    block_id: str,
    body: ScheduleBlockUpdateRequest,
    repo: ScheduleRepository = Depends(get_repository),
):
    return await schedule_service.update_schedule_block(repo, block_id, body)


@router.post("/bulk", response_model=BulkScheduleResponse, status_code=status.HTTP_201_CREATED)
async def bulk_schedule(
    body: BulkScheduleRequest,
    repo: ScheduleRepository = Depends(get_repository),
) -> BulkScheduleResponse:
    results = await schedule_service.apply_bulk_schedule(repo, body)
    return BulkScheduleResponse(
        message=f"Bulk operation completed. {len(results)} item(s) written.",
        results=[
            BulkScheduleResult(
                type=kind,
                data=(
                    WorkingHoursPublic.model_validate(row, from_attributes=True)
                    if kind.startswith("schedule_")
                    else ScheduleBlockPublic.model_validate(row, from_attributes=True)
                ),
            )
            for kind, row in results
        ],
    )
