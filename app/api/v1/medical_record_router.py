# app/api/v1/medical_record_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.schemas import (
    MedicalRecordCreate,
    MedicalRecordUpdate,
    MedicalRecordResponse,
    MessageResponse,
    ErrorResponse,
)
from app.services.v1 import MedicalRecordService
from app.db import get_db
from .auth_deps import require_staff

medical_record_router = APIRouter(
    prefix="/medical-records",
    tags=["Medical Records"],
    dependencies=[Depends(require_staff)],
)

_NOT_FOUND = {404: {"description": "Record or patient not found", "model": ErrorResponse}}


@medical_record_router.get("", response_model=list[MedicalRecordResponse])
async def list_medical_records(db: AsyncSession = Depends(get_db)):
    return await MedicalRecordService(db).list_records()


@medical_record_router.get(
    "/patient/{patient_id}",
    response_model=list[MedicalRecordResponse],
    summary="Medical records for one patient",
)
async def list_patient_medical_records(patient_id: str, db: AsyncSession = Depends(get_db)):
    return await MedicalRecordService(db).list_for_patient(patient_id)


@medical_record_router.get(
    "/{record_id}", response_model=MedicalRecordResponse, responses=_NOT_FOUND
)
async def get_medical_record(record_id: str, db: AsyncSession = Depends(get_db)):
    return await MedicalRecordService(db).get_record(record_id)


@medical_record_router.post(
    "",
    response_model=MedicalRecordResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a medical record",
    description="The patientId must exist in the local patient table.",
    responses=_NOT_FOUND,
)
async def create_medical_record(body: MedicalRecordCreate, db: AsyncSession = Depends(get_db)):
    return await MedicalRecordService(db).create_record(body)


@medical_record_router.put(
    "/{record_id}", response_model=MedicalRecordResponse, responses=_NOT_FOUND
)
async def update_medical_record(
    record_id: str, body: MedicalRecordUpdate, db: AsyncSession = Depends(get_db)
):
    return await MedicalRecordService(db).update_record(record_id, body)


@medical_record_router.delete(
    "/{record_id}", response_model=MessageResponse, responses=_NOT_FOUND
)
async def delete_medical_record(record_id: str, db: AsyncSession = Depends(get_db)):
    await MedicalRecordService(db).delete_record(record_id)
    return MessageResponse(message="Medical record deleted")


__all__ = ["medical_record_router"]
