import re
from datetime import date

from app.core.exceptions import InputError

MINUTES_PER_DAY = 24 * 60

_CLOCK_RE = re.compile(r"^(\d{2}):(\d{2})$")


def to_minutes(clock: str) -> int:
    """Convert an ``HH:MM`` string to minutes since midnight."""
    match = _CLOCK_RE.match(clock) if isinstance(clock, str) else None
    if not match:
        raise InputError(f"Invalid time {clock!r}, expected HH:MM")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InputError(f"Invalid time {clock!r}, out of range")
    return hours * 60 + minutes


def to_clock(minutes: int) -> str:
    """Inverse of to_minutes, zero-padded."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise InputError(f"Minute offset {minutes} is outside a single day")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_date(value: str | date) -> date:
    """Accept a date or a YYYY-MM-DD string."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise InputError(f"Invalid date {value!r}, expected YYYY-MM-DD") from None


def day_of_week(d: date) -> int:
    # 0=Sunday .. 6=Saturday; date.weekday() starts on Monday
    return (d.weekday() + 1) % 7
