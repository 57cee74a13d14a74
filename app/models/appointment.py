from datetime import date, datetime

from sqlalchemy import Index, text
from sqlmodel import Field, SQLModel

from app.models.common import new_id, utc_naive_now
from app.services.availability import STATUS_SCHEDULED, BookedAppointment
from app.services.time_utils import to_minutes

LIVE_SLOT_INDEX = "uq_appointments_live_slot"


class AppointmentBase(SQLModel):
    appointment_date: date = Field(index=True)
    appointment_time: str = Field(max_length=5)  # HH:MM
    service_type: str = Field(max_length=100)
    pet_name: str = Field(max_length=255)
    tutor_rut: str = Field(max_length=12, index=True)  # digits only
    tutor_name: str = Field(max_length=255)
    tutor_phone: str = Field(max_length=20)
    tutor_email: str | None = Field(default=None, max_length=255)
    address: str
    notes: str | None = None
    vet_notes: str | None = None


class Appointment(AppointmentBase, table=True):
    __tablename__ = "appointments"
    # Only one live booking may start at a given date/time. This closes the
    # exact-duplicate race; overlapping bookings with different starts are not
    # caught here.
    __table_args__ = (
        Index(
            LIVE_SLOT_INDEX,
            "appointment_date",
            "appointment_time",
            unique=True,
            postgresql_where=text("status <> 'cancelled'"),
            sqlite_where=text("status <> 'cancelled'"),
        ),
    )
    id: str = Field(default_factory=new_id, primary_key=True)
    status: str = Field(default=STATUS_SCHEDULED, max_length=20)  # scheduled, completed, cancelled
    created_at: datetime = Field(default_factory=utc_naive_now)
    updated_at: datetime = Field(default_factory=utc_naive_now)

    def to_booked(self) -> BookedAppointment:
        return BookedAppointment(
            id=self.id,
            appointment_date=self.appointment_date,
            start_minutes=to_minutes(self.appointment_time),
            service_type=self.service_type,
            status=self.status,
        )


class AppointmentPublic(AppointmentBase):
    id: str
    status: str
    duration_minutes: int
    created_at: datetime
    updated_at: datetime
