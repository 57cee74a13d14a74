from datetime import date, datetime

from sqlmodel import Field, SQLModel

from app.models.common import new_id, utc_naive_now
from app.services.availability import DateBlock
from app.services.time_utils import to_minutes


class ScheduleBlockBase(SQLModel):
    block_date: date = Field(index=True)
    # Both NULL blocks the whole day
    start_time: str | None = Field(default=None, max_length=5)
    end_time: str | None = Field(default=None, max_length=5)
    reason: str = Field(max_length=255)
    is_active: bool = True


class ScheduleBlock(ScheduleBlockBase, table=True):
    __tablename__ = "schedule_blocks"
    id: str = Field(default_factory=new_id, primary_key=True)
    created_at: datetime = Field(default_factory=utc_naive_now)

    def to_block(self) -> DateBlock:
        return DateBlock(
            block_date=self.block_date,
            start_minutes=to_minutes(self.start_time) if self.start_time else None,
            end_minutes=to_minutes(self.end_time) if self.end_time else None,
            active=self.is_active,
        )


class ScheduleBlockPublic(ScheduleBlockBase):
    id: str
    created_at: datetime
