# app/db/schemas/common_schemas.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Any, Optional
from .base_schema import CamelModel
from .patient_schema import PatientResponse
from .medical_record_schemas import MedicalRecordResponse
from .appointment_schemas import AppointmentResponse


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    message: str = Field(..., description="Human-readable failure reason")
    error: str = Field(..., description="Stable error code")
    timestamp: datetime = Field(..., description="Server time when the error occurred")
    errors: Optional[list[dict[str, Any]]] = None


class SyncError(CamelModel):
    index: int = Field(..., description="Position of the rejected item in the batch")
    id: Optional[str] = None
    email: Optional[str] = None
    message: str


class SyncPatientsResponse(CamelModel):
    message: str
    added: int
    errors: list[SyncError] = Field(default_factory=list)


class PatientRecordsResponse(CamelModel):
    patient: PatientResponse
    medical_records: list[MedicalRecordResponse]
    appointments: list[AppointmentResponse]


class HealthCheckResponse(BaseModel):
    status: str = Field(..., description="Current system health status")
    environment: str
    timestamp: datetime = Field(..., description="Server time in ISO 8601 format")
    version: str = Field(..., description="Application version")
    database: dict[str, Any] = Field(default_factory=dict)
    log_level: str = Field(..., description="Application log level")


class EnvironmentResponse(BaseModel):
    environment: str
    service: str
    version: str


__all__ = [
    "MessageResponse",
    "ErrorResponse",
    "SyncError",
    "SyncPatientsResponse",
    "PatientRecordsResponse",
    "HealthCheckResponse",
    "EnvironmentResponse",
]
