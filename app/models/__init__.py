from app.models.working_hours import WorkingHours, WorkingHoursPublic
from app.models.schedule_block import ScheduleBlock, ScheduleBlockPublic
from app.models.appointment import Appointment, AppointmentPublic

__all__ = [
    "WorkingHours",
    "WorkingHoursPublic",
    "ScheduleBlock",
    "ScheduleBlockPublic",
    "Appointment",
    "AppointmentPublic",
]
