from datetime import date
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from app.core.exceptions import InputError
from app.models.schedule_block import ScheduleBlockPublic
from app.models.working_hours import WorkingHoursPublic
from app.services.time_utils import to_minutes


def _clock(value: str) -> str:
    to_minutes(value)
    return value


# HH:MM, rejected with InputError (surfaced as 422) when malformed
Clock = Annotated[str, AfterValidator(_clock)]


def reject_nulls(data: Any, fields: tuple[str, ...]) -> Any:
    """Fail when a partial update sends an explicit null for a NOT NULL column."""
    if isinstance(data, dict):
        nulls = [f for f in fields if f in data and data[f] is None]
        if nulls:
            raise InputError(f"{', '.join(nulls)} cannot be null")
    return data


def _check_range(start: str | None, end: str | None, what: str) -> None:
    if start is not None and end is not None and to_minutes(start) >= to_minutes(end):
        raise InputError(f"{what} must start before it ends ({start} >= {end})")


class WorkingHoursCreateRequest(BaseModel):
    day_of_week: int = Field(ge=0, le=6)  # 0=Sunday
    start_time: Clock
    end_time: Clock
    is_active: bool = True

    @model_validator(mode="after")
    def start_before_end(self) -> "WorkingHoursCreateRequest":
        _check_range(self.start_time, self.end_time, "Working hours")
        return self


class WorkingHoursUpdateRequest(BaseModel):
    day_of_week: int | None = Field(default=None, ge=0, le=6)
    start_time: Clock | None = None
    end_time: Clock | None = None
    is_active: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def required_columns_not_null(cls, data: Any) -> Any:
        return reject_nulls(data, ("day_of_week", "start_time", "end_time", "is_active"))


class ScheduleBlockCreateRequest(BaseModel):
    block_date: date
    start_time: Clock | None = None
    end_time: Clock | None = None
    reason: str = Field(min_length=1, max_length=255)
    is_active: bool = True

    @model_validator(mode="after")
    def both_bounds_or_none(self) -> "ScheduleBlockCreateRequest":
        if (self.start_time is None) != (self.end_time is None):
            raise InputError("A partial block needs both start_time and end_time; omit both to block the whole day")
        _check_range(self.start_time, self.end_time, "Block")
        return self


class ScheduleBlockUpdateRequest(BaseModel):
    block_date: date | None = None
    start_time: Clock | None = None
    end_time: Clock | None = None
    reason: str | None = Field(default=None, min_length=1, max_length=255)
    is_active: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def required_columns_not_null(cls, data: Any) -> Any:
        # start_time and end_time may be nulled together to make a full-day block
        return reject_nulls(data, ("block_date", "reason", "is_active"))


class BulkScheduleRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    from_date: date
    to_date: date
    action: Literal["enable", "disable"]
    start_time: Clock | None = None
    end_time: Clock | None = None
    enable_lunch: bool = False
    lunch_start: Clock | None = None
    lunch_end: Clock | None = None

    @model_validator(mode="after")
    def check_ranges(self) -> "BulkScheduleRequest":
        if self.from_date > self.to_date:
            raise InputError("fromDate must not be after toDate")
        _check_range(self.start_time, self.end_time, "Working hours")
        _check_range(self.lunch_start, self.lunch_end, "Lunch")
        return self


class BulkScheduleResult(BaseModel):
    type: Literal["schedule_created", "schedule_updated", "lunch_block", "day_block"]
    data: WorkingHoursPublic | ScheduleBlockPublic


class BulkScheduleResponse(BaseModel):
    message: str
    results: list[BulkScheduleResult]


class IsBlockedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_blocked: bool = Field(alias="isBlocked")


class ServiceTypeInfo(BaseModel):
    name: str
    duration: int
    color: str
