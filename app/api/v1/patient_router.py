# app/api/v1/patient_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.models import Patient
from app.db.schemas import (
    PatientCreate,
    PatientUpdate,
    PatientResponse,
    MessageResponse,
    ErrorResponse,
)
from app.services.v1 import PatientService
from app.db import get_db
from .auth_deps import require_staff

patient_router = APIRouter(
    prefix="/patients",
    tags=["Patients"],
    dependencies=[Depends(require_staff)],
)


@patient_router.get(
    "",
    response_model=list[PatientResponse],
    status_code=status.HTTP_200_OK,
    summary="List patients",
)
async def list_patients(db: AsyncSession = Depends(get_db)):
    return await PatientService(db, Patient).list_patients()


@patient_router.get(
    "/{patient_id}",
    response_model=PatientResponse,
    status_code=status.HTTP_200_OK,
    summary="Get patient details",
    description="""
    Fetches the directory profile for a specific patient.

    **Database Impact:** primary-key lookup, 1 query.
    """,
    responses={
        404: {"description": "Patient not found", "model": ErrorResponse},
        500: {"description": "Internal Database Error", "model": ErrorResponse},
    },
)
async def get_patient(patient_id: str, db: AsyncSession = Depends(get_db)):
    return await PatientService(db, Patient).get_patient(patient_id)


@patient_router.post(
    "",
    response_model=PatientResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a patient",
    responses={409: {"description": "Email already in use", "model": ErrorResponse}},
)
async def create_patient(body: PatientCreate, db: AsyncSession = Depends(get_db)):
    return await PatientService(db, Patient).create_patient(body)


@patient_router.put(
    "/{patient_id}",
    response_model=PatientResponse,
    status_code=status.HTTP_200_OK,
    summary="Update a patient",
    description="Partial update: only the fields present in the body are changed.",
    responses={
        404: {"description": "Patient not found", "model": ErrorResponse},
        409: {"description": "Email already in use", "model": ErrorResponse},
    },
)
async def update_patient(
    patient_id: str, body: PatientUpdate, db: AsyncSession = Depends(get_db)
):
    return await PatientService(db, Patient).update_patient(patient_id, body)


@patient_router.delete(
    "/{patient_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete a patient",
    responses={404: {"description": "Patient not found", "model": ErrorResponse}},
)
async def delete_patient(patient_id: str, db: AsyncSession = Depends(get_db)):
    await PatientService(db, Patient).delete_patient(patient_id)
    return MessageResponse(message="Patient deleted")


__all__ = ["patient_router"]
