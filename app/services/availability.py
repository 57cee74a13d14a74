"""Pure availability computation.

Everything here works on values already fetched from the stores: no I/O, no
shared state. The result is advisory only. Nothing is reserved, so two callers
may both be offered the same slot; booking must re-check (see
appointment_service) and rely on the database's unique index.
"""
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from app.core.exceptions import InputError
from app.services.intervals import overlaps
from app.services.service_catalog import MIN_APPOINTMENT_SEPARATION, get_service_duration
from app.services.time_utils import to_clock

logger = logging.getLogger(__name__)

STATUS_SCHEDULED = "scheduled"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"


@dataclass(frozen=True)
class WorkingWindow:
    day_of_week: int  # 0=Sunday
    start_minutes: int
    end_minutes: int
    active: bool = True


@dataclass(frozen=True)
class DateBlock:
    block_date: date
    start_minutes: int | None = None
    end_minutes: int | None = None
    active: bool = True

    @property
    def is_full_day(self) -> bool:
        # Either bound missing counts as a whole-day block, not only both.
        return self.start_minutes is None or self.end_minutes is None

    def blocks(self, start: int, duration: int) -> bool:
        if self.is_full_day:
            return True
        return overlaps(start, duration, self.start_minutes, self.end_minutes - self.start_minutes)


@dataclass(frozen=True)
class BookedAppointment:
    id: str
    appointment_date: date
    start_minutes: int
    service_type: str
    status: str = STATUS_SCHEDULED

    @property
    def duration(self) -> int:
        return get_service_duration(self.service_type)


def _warn_one_bound_blocks(blocks: list[DateBlock]) -> None:
    for block in blocks:
        if (block.start_minutes is None) != (block.end_minutes is None):
            logger.warning(
                "Block on %s has only one time bound; treating it as a full-day block",
                block.block_date,
            )


def compute_available_slots(
    windows: Iterable[WorkingWindow],
    blocks: Iterable[DateBlock],
    appointments: Iterable[BookedAppointment],
    requested_service_type: str | None = None,
    exclude_appointment_id: str | None = None,
    step_minutes: int = MIN_APPOINTMENT_SEPARATION,
) -> list[str]:
    """Return the bookable ``HH:MM`` start times for one date.

    Candidates are generated per working window every ``step_minutes`` and
    kept only if the requested service fits entirely inside that window and
    overlaps no active block and no live appointment. Cancelled appointments
    and the one being edited (``exclude_appointment_id``) are ignored.
    """
    if step_minutes <= 0:
        raise InputError(f"step_minutes must be positive, got {step_minutes}")
    active_windows = [w for w in windows if w.active]
    if not active_windows:
        return []

    active_blocks = [b for b in blocks if b.active]
    _warn_one_bound_blocks(active_blocks)

    # (start, duration) pairs; each sized by its own service type
    busy = [
        (a.start_minutes, a.duration)
        for a in appointments
        if a.status != STATUS_CANCELLED and a.id != exclude_appointment_id
    ]
    duration = get_service_duration(requested_service_type)

    slots: set[str] = set()
    for window in active_windows:
        start = window.start_minutes
        while start < window.end_minutes:
            candidate = start
            start += step_minutes
            if candidate + duration > window.end_minutes:
                continue
            if any(b.blocks(candidate, duration) for b in active_blocks):
                continue
            if any(overlaps(candidate, duration, s, d) for s, d in busy):
                continue
            slots.add(to_clock(candidate))
    return sorted(slots)


def is_fully_blocked(windows: Iterable[WorkingWindow], blocks: Iterable[DateBlock]) -> bool:
    """True if a full-day block is active or no working window is active.

    Partial blocks and appointment density are not considered.
    """
    if any(b.active and b.is_full_day for b in blocks):
        return True
    return not any(w.active for w in windows)
