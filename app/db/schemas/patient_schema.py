# app/db/schemas/patient_schema.py
from pydantic import Field, EmailStr
from datetime import date, datetime
from typing import Optional
from ..models import Gender
from .base_schema import CamelModel


class PatientBase(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: date
    gender: Optional[Gender] = None
    contact_number: Optional[str] = Field(None, max_length=32)
    email: Optional[EmailStr] = None


class PatientCreate(PatientBase):
    pass


class PatientSyncItem(PatientBase):
    # Sync keeps the directory's id so clinical rows reference the same patient
    id: Optional[str] = Field(None, min_length=1, max_length=36)


class PatientUpdate(CamelModel):
    # All fields optional; only the ones sent are applied
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    contact_number: Optional[str] = Field(None, max_length=32)
    email: Optional[EmailStr] = None


class PatientResponse(PatientBase):
    id: str
    created_at: datetime


__all__ = [
    "PatientBase",
    "PatientCreate",
    "PatientSyncItem",
    "PatientUpdate",
    "PatientResponse",
]
