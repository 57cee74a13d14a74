from datetime import date
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BaseModel, EmailStr, Field, model_validator

from app.api.schemas.schedule import Clock, reject_nulls
from app.services.rut import clean_rut

# Stored digits-only so lookups by tutor match however the RUT was typed
Rut = Annotated[str, AfterValidator(clean_rut)]


class BookAppointmentRequest(BaseModel):
    appointment_date: date
    appointment_time: Clock
    service_type: str = Field(min_length=1, max_length=100)
    pet_name: str = Field(min_length=1, max_length=255)
    tutor_rut: Rut
    tutor_name: str = Field(min_length=1, max_length=255)
    tutor_phone: str = Field(min_length=1, max_length=20)
    tutor_email: EmailStr | None = None
    address: str = Field(min_length=1)
    notes: str | None = None


class UpdateAppointmentRequest(BaseModel):
    appointment_date: date | None = None
    appointment_time: Clock | None = None
    service_type: str | None = Field(default=None, min_length=1, max_length=100)
    status: Literal["scheduled", "completed", "cancelled"] | None = None
    pet_name: str | None = Field(default=None, min_length=1, max_length=255)
    tutor_rut: Rut | None = None
    tutor_name: str | None = Field(default=None, min_length=1, max_length=255)
    tutor_phone: str | None = Field(default=None, min_length=1, max_length=20)
    tutor_email: EmailStr | None = None
    address: str | None = Field(default=None, min_length=1)
    notes: str | None = None
    vet_notes: str | None = None

    @model_validator(mode="before")
    @classmethod
    def required_columns_not_null(cls, data: Any) -> Any:
        # Omit a field to leave it unchanged; only the notes and email may be cleared
        return reject_nulls(
            data,
            (
                "appointment_date",
                "appointment_time",
                "service_type",
                "status",
                "pet_name",
                "tutor_rut",
                "tutor_name",
                "tutor_phone",
                "address",
            ),
        )
