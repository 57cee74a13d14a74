from datetime import date

from app.core.config import settings
from app.services.availability import compute_available_slots, is_fully_blocked
from app.services.repository import ScheduleRepository
from app.services.time_utils import day_of_week, parse_date


async def get_available_slots(
    repo: ScheduleRepository,
    target_date: date | str,
    service_type: str | None = None,
    exclude_appointment_id: str | None = None,
) -> list[str]:
    """Bookable HH:MM start times for the date, sized for ``service_type``.

    Store failures propagate as CollaboratorError; ``[]`` only ever means the
    date has no capacity.
    """
    d = parse_date(target_date)
    windows = await repo.list_active_working_windows(day_of_week(d))
    if not windows:
        return []
    blocks = await repo.list_active_date_blocks(d)
    appointments = await repo.list_appointments(d)
    return compute_available_slots(
        [w.to_window() for w in windows],
        [b.to_block() for b in blocks],
        [a.to_booked() for a in appointments],
        requested_service_type=service_type,
        exclude_appointment_id=exclude_appointment_id,
        step_minutes=settings.min_appointment_separation_minutes,
    )


async def is_date_fully_blocked(repo: ScheduleRepository, target_date: date | str) -> bool:
    d = parse_date(target_date)
    blocks = await repo.list_active_date_blocks(d)
    windows = await repo.list_active_working_windows(day_of_week(d))
    return is_fully_blocked(
        [w.to_window() for w in windows],
        [b.to_block() for b in blocks],
    )
