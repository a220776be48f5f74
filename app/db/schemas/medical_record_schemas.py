# app/db/schemas/medical_record_schemas.py
from pydantic import Field
from datetime import datetime
from typing import Optional
from .base_schema import CamelModel


class MedicalRecordBase(CamelModel):
    doctor_name: str = Field(..., min_length=1, max_length=100)
    diagnosis: Optional[str] = Field(None, max_length=5000)
    treatment: Optional[str] = Field(None, max_length=5000)


class MedicalRecordCreate(MedicalRecordBase):
    patient_id: str = Field(..., min_length=1, max_length=36)


class MedicalRecordUpdate(CamelModel):
    patient_id: Optional[str] = Field(None, min_length=1, max_length=36)
    doctor_name: Optional[str] = Field(None, min_length=1, max_length=100)
    diagnosis: Optional[str] = Field(None, max_length=5000)
    treatment: Optional[str] = Field(None, max_length=5000)


class MedicalRecordResponse(MedicalRecordBase):
    id: str
    patient_id: str
    created_at: datetime


__all__ = [
    "MedicalRecordCreate",
    "MedicalRecordUpdate",
    "MedicalRecordResponse",
]
