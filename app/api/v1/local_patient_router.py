# app/api/v1/local_patient_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.models import LocalPatient
from app.db.schemas import (
    PatientCreate,
    PatientSyncItem,
    PatientResponse,
    SyncPatientsResponse,
    ErrorResponse,
)
from app.services.v1 import PatientService
from app.db import get_db
from .auth_deps import require_admin, require_staff

local_patient_router = APIRouter(tags=["Local Patients"])


@local_patient_router.get(
    "/local-patients",
    response_model=list[PatientResponse],
    dependencies=[Depends(require_staff)],
    summary="List the clinical service's patient copies",
)
async def list_local_patients(db: AsyncSession = Depends(get_db)):
    return await PatientService(db, LocalPatient).list_patients()


@local_patient_router.get(
    "/local-patients/{patient_id}",
    response_model=PatientResponse,
    dependencies=[Depends(require_staff)],
    responses={404: {"description": "Patient not found", "model": ErrorResponse}},
)
async def get_local_patient(patient_id: str, db: AsyncSession = Depends(get_db)):
    return await PatientService(db, LocalPatient).get_patient(patient_id)


@local_patient_router.post(
    "/local-patients",
    response_model=PatientResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_staff)],
    responses={409: {"description": "Email already in use", "model": ErrorResponse}},
)
async def create_local_patient(body: PatientCreate, db: AsyncSession = Depends(get_db)):
    return await PatientService(db, LocalPatient).create_patient(body)


@local_patient_router.post(
    "/sync-patients",
    response_model=SyncPatientsResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_admin)],
    summary="Bulk-load patients from the directory",
    description="""
    Inserts every item whose id and email are not already present.
    Duplicates are skipped and listed in `errors`; the call still
    returns 200 when some items were skipped.
    """,
)
async def sync_patients(body: list[PatientSyncItem], db: AsyncSession = Depends(get_db)):
    return await PatientService(db, LocalPatient).sync_patients(body)


__all__ = ["local_patient_router"]
