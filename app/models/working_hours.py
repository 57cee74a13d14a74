from datetime import datetime

from sqlmodel import Field, SQLModel

from app.models.common import new_id, utc_naive_now
from app.services.availability import WorkingWindow
from app.services.time_utils import to_minutes


class WorkingHoursBase(SQLModel):
    day_of_week: int = Field(index=True)  # 0=Sunday, 1=Monday, ...
    start_time: str = Field(max_length=5)  # HH:MM
    end_time: str = Field(max_length=5)  # HH:MM
    is_active: bool = True


class WorkingHours(WorkingHoursBase, table=True):
    __tablename__ = "working_hours"
    id: str = Field(default_factory=new_id, primary_key=True)
    created_at: datetime = Field(default_factory=utc_naive_now)

    def to_window(self) -> WorkingWindow:
        return WorkingWindow(
            day_of_week=self.day_of_week,
            start_minutes=to_minutes(self.start_time),
            end_minutes=to_minutes(self.end_time),
            active=self.is_active,
        )


class WorkingHoursPublic(WorkingHoursBase):
    id: str
    created_at: datetime
