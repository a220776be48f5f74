# app/api/v1/patient_records_router.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.schemas import PatientRecordsResponse, ErrorResponse
from app.services.v1 import AppointmentService
from app.db import get_db
from .auth_deps import require_staff

patient_records_router = APIRouter(
    tags=["Patient Records"],
    dependencies=[Depends(require_staff)],
)


@patient_records_router.get(
    "/patient-records/{patient_id}",
    response_model=PatientRecordsResponse,
    summary="Patient with medical records and appointments",
    description="""
    Combined view of one local patient.

    **Database Impact:** 3 queries (patient, records, appointments).
    """,
    responses={404: {"description": "Patient not found", "model": ErrorResponse}},
)
async def get_patient_records(patient_id: str, db: AsyncSession = Depends(get_db)):
    return await AppointmentService(db).get_patient_records(patient_id)


__all__ = ["patient_records_router"]
