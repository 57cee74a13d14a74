import logging
from datetime import timedelta

from app.api.schemas.schedule import (
    BulkScheduleRequest,
    ScheduleBlockCreateRequest,
    ScheduleBlockUpdateRequest,
    WorkingHoursCreateRequest,
    WorkingHoursUpdateRequest,
)
from app.core.config import settings
from app.core.exceptions import InputError, NotFoundError
from app.models.schedule_block import ScheduleBlock
from app.models.working_hours import WorkingHours
from app.services.repository import ScheduleRepository
from app.services.time_utils import day_of_week, to_minutes

logger = logging.getLogger(__name__)

LUNCH_REASON = "Almuerzo"
DAY_BLOCK_REASON = "Día Bloqueado"


def _ensure_ordered(start: str | None, end: str | None, what: str) -> None:
    if start and end and to_minutes(start) >= to_minutes(end):
        raise InputError(f"{what} must start before it ends ({start} >= {end})")


async def list_working_hours(repo: ScheduleRepository) -> list[WorkingHours]:
    return await repo.list_active_working_windows()


async def create_working_hours(repo: ScheduleRepository, data: WorkingHoursCreateRequest) -> WorkingHours:
    row = WorkingHours(**data.model_dump())
    return await repo.add(row)


async def update_working_hours(
    repo: ScheduleRepository, hours_id: str, data: WorkingHoursUpdateRequest
) -> WorkingHours:
    row = await repo.get(WorkingHours, hours_id)
    if not row:
        raise NotFoundError("Schedule not found")
    changes = data.model_dump(exclude_unset=True)
    _ensure_ordered(
        changes.get("start_time", row.start_time), changes.get("end_time", row.end_time), "Working hours"
    )
    for key, value in changes.items():
        setattr(row, key, value)
    return await repo.save(row)


async def list_schedule_blocks(repo: ScheduleRepository) -> list[ScheduleBlock]:
    return await repo.list_active_date_blocks()


async def create_schedule_block(repo: ScheduleRepository, data: ScheduleBlockCreateRequest) -> ScheduleBlock:
    row = ScheduleBlock(**data.model_dump())
    return await repo.add(row)


async def update_schedule_block(
    repo: ScheduleRepository, block_id: str, data: ScheduleBlockUpdateRequest
) -> ScheduleBlock:
    row = await repo.get(ScheduleBlock, block_id)
    if not row:
        raise NotFoundError("Schedule block not found")
    changes = data.model_dump(exclude_unset=True)
    start = changes.get("start_time", row.start_time)
    end = changes.get("end_time", row.end_time)
    if (start is None) != (end is None):
        raise InputError("A partial block needs both start_time and end_time")
    _ensure_ordered(start, end, "Block")
    for key, value in changes.items():
        setattr(row, key, value)
    return await repo.save(row)


async def apply_bulk_schedule(
    repo: ScheduleRepository, data: BulkScheduleRequest
) -> list[tuple[str, WorkingHours | ScheduleBlock]]:
    """Enable or disable every date in [from_date, to_date].

    ``enable`` upserts the weekly working hours for each date's weekday (when
    both times are given) and optionally adds a lunch block on each date.
    ``disable`` adds a full-day block on each date.
    Returns (result_type, row) pairs in processing order.
    """
    days = (data.to_date - data.from_date).days + 1
    if days > settings.max_bulk_schedule_days:
        raise InputError(f"Bulk range covers {days} days; at most {settings.max_bulk_schedule_days} allowed")

    results: list[tuple[str, WorkingHours | ScheduleBlock]] = []
    current = data.from_date
    while current <= data.to_date:
        if data.action == "enable":
            if data.start_time and data.end_time:
                dow = day_of_week(current)
                existing = await repo.list_active_working_windows(dow)
                if existing:
                    row = existing[0]
                    row.start_time = data.start_time
                    row.end_time = data.end_time
                    row.is_active = True
                    results.append(("schedule_updated", await repo.save(row)))
                else:
                    row = WorkingHours(
                        day_of_week=dow,
                        start_time=data.start_time,
                        end_time=data.end_time,
                        is_active=True,
                    )
                    results.append(("schedule_created", await repo.add(row)))
            if data.enable_lunch and data.lunch_start and data.lunch_end:
                block = ScheduleBlock(
                    block_date=current,
                    start_time=data.lunch_start,
                    end_time=data.lunch_end,
                    reason=LUNCH_REASON,
                    is_active=True,
                )
                results.append(("lunch_block", await repo.add(block)))
        else:
            block = ScheduleBlock(
                block_date=current,
                start_time=None,
                end_time=None,
                reason=DAY_BLOCK_REASON,
                is_active=True,
            )
            results.append(("day_block", await repo.add(block)))
        current += timedelta(days=1)

    logger.info(
        "Bulk schedule %s %s..%s: %d change(s)", data.action, data.from_date, data.to_date, len(results)
    )
    return results
