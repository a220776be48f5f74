# app/api/v1/appointment_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.schemas import (
    AppointmentCreate,
    AppointmentUpdate,
    AppointmentResponse,
    MessageResponse,
    ErrorResponse,
)
from app.services.v1 import AppointmentService
from app.db import get_db
from .auth_deps import require_staff

appointment_router = APIRouter(
    prefix="/appointments",
    tags=["Appointments"],
    dependencies=[Depends(require_staff)],
)

_WRITE_RESPONSES = {
    404: {"description": "Appointment or patient not found", "model": ErrorResponse},
    409: {"description": "This time slot is already booked", "model": ErrorResponse},
}


@appointment_router.get("", response_model=list[AppointmentResponse])
async def list_appointments(db: AsyncSession = Depends(get_db)):
    return await AppointmentService(db).list_appointments()


@appointment_router.get(
    "/patient/{patient_id}",
    response_model=list[AppointmentResponse],
    summary="Appointments for one patient",
)
async def list_patient_appointments(patient_id: str, db: AsyncSession = Depends(get_db)):
    return await AppointmentService(db).list_for_patient(patient_id)


@appointment_router.get(
    "/{appointment_id}",
    response_model=AppointmentResponse,
    responses={404: {"description": "Appointment not found", "model": ErrorResponse}},
)
async def get_appointment(appointment_id: str, db: AsyncSession = Depends(get_db)):
    return await AppointmentService(db).get_appointment(appointment_id)


@appointment_router.post(
    "",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book an appointment",
    description="""
    Rejected with 409 when the doctor already has a Scheduled appointment
    at exactly the same appointmentDate.

    **Database Impact:** patient lookup + slot lookup + insert, 3 queries.
    """,
    responses=_WRITE_RESPONSES,
)
async def create_appointment(body: AppointmentCreate, db: AsyncSession = Depends(get_db)):
    return await AppointmentService(db).create_appointment(body)


@appointment_router.put(
    "/{appointment_id}",
    response_model=AppointmentResponse,
    summary="Reschedule or change status",
    responses=_WRITE_RESPONSES,
)
async def update_appointment(
    appointment_id: str, body: AppointmentUpdate, db: AsyncSession = Depends(get_db)
):
    return await AppointmentService(db).update_appointment(appointment_id, body)


@appointment_router.delete(
    "/{appointment_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Appointment not found", "model": ErrorResponse}},
)
async def delete_appointment(appointment_id: str, db: AsyncSession = Depends(get_db)):
    await AppointmentService(db).delete_appointment(appointment_id)
    return MessageResponse(message="Appointment deleted")


__all__ = ["appointment_router"]
