# app/db/schemas/appointment_schemas.py
from pydantic import Field, field_validator
from datetime import datetime, timezone
from typing import Optional
from ..models import AppointmentStatus
from .base_schema import CamelModel


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalise a timestamp to UTC. Naive values are taken as UTC.

    Conflict detection compares timestamps for exact equality, so every
    stored and queried appointmentDate goes through here.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class AppointmentBase(CamelModel):
    doctor_name: str = Field(..., min_length=1, max_length=100)
    appointment_date: datetime = Field(..., description="Slot start, exact-match semantics")
    status: AppointmentStatus = AppointmentStatus.SCHEDULED

    @field_validator("appointment_date")
    @classmethod
    def normalise_date(cls, v: datetime) -> datetime:
        return as_utc(v)  # type: ignore[return-value]


class AppointmentCreate(AppointmentBase):
    patient_id: str = Field(..., min_length=1, max_length=36)


class AppointmentUpdate(CamelModel):
    # Used for rescheduling or updating status
    patient_id: Optional[str] = Field(None, min_length=1, max_length=36)
    doctor_name: Optional[str] = Field(None, min_length=1, max_length=100)
    appointment_date: Optional[datetime] = None
    status: Optional[AppointmentStatus] = None

    @field_validator("appointment_date")
    @classmethod
    def normalise_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)


class AppointmentResponse(AppointmentBase):
    id: str
    patient_id: str
    created_at: datetime


__all__ = [
    "as_utc",
    "AppointmentCreate",
    "AppointmentUpdate",
    "AppointmentResponse",
]
