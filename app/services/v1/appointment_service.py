# app/services/v1/appointment_service.py
"""
Appointment scheduling.

Every write that leaves an appointment Scheduled goes through the conflict
checker first. A rejected write raises ConflictError and persists nothing.
"""
from typing import NoReturn
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Appointment, AppointmentStatus, MedicalRecord
from app.db.schemas import AppointmentCreate, AppointmentUpdate, PatientRecordsResponse
from common.api_error import ConflictError, NotFoundError
from common.logger import get_app_logger
from .conflict_checker import check_conflict, SLOT_TAKEN_MESSAGE
from .patient_service import reject_null_required
from .referential_validator import ensure_patient_exists

logger = get_app_logger(__name__)

# An update touching any of these may move the appointment into an occupied slot
_SLOT_FIELDS = {"doctor_name", "appointment_date", "status"}


class AppointmentService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_appointments(self) -> list[Appointment]:
        result = await self.db.execute(
            select(Appointment).order_by(Appointment.appointment_date)
        )
        return list(result.scalars().all())

    async def list_for_patient(self, patient_id: str) -> list[Appointment]:
        query = (
            select(Appointment)
            .where(Appointment.patient_id == patient_id)
            .order_by(Appointment.appointment_date)
            .execution_options(logging_token="AppointmentService.list_for_patient")
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_appointment(self, appointment_id: str) -> Appointment:
        appointment = await self.db.get(Appointment, appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment not found")
        return appointment

    async def create_appointment(self, data: AppointmentCreate) -> Appointment:
        """
        Raises:
            NotFoundError: patientId has no local patient
            ConflictError: the doctor already has a Scheduled appointment
                at exactly this time
        """
        await ensure_patient_exists(self.db, data.patient_id)

        if data.status == AppointmentStatus.SCHEDULED and await check_conflict(
            self.db, data.doctor_name, data.appointment_date
        ):
            self._reject(data.doctor_name, data.appointment_date)

        appointment = Appointment(**data.model_dump())
        self.db.add(appointment)
        await self.db.flush()
        logger.info(
            "Appointment created",
            appointment_id=appointment.id,
            patient_id=appointment.patient_id,
            doctor_name=appointment.doctor_name,
        )
        return appointment

    async def update_appointment(
        self, appointment_id: str, data: AppointmentUpdate
    ) -> Appointment:
        """
        Apply a partial update.

        The conflict check uses the stored row with the update merged over it,
        and runs only when the result is Scheduled and a slot field changed.
        Moving away from Scheduled never conflicts.
        """
        appointment = await self.get_appointment(appointment_id)
        changes = data.model_dump(exclude_unset=True)
        reject_null_required(
            changes, ("patient_id", "doctor_name", "appointment_date", "status")
        )

        if "patient_id" in changes:
            await ensure_patient_exists(self.db, changes["patient_id"])

        doctor_name = changes.get("doctor_name", appointment.doctor_name)
        appointment_date = changes.get("appointment_date", appointment.appointment_date)
        status = changes.get("status", appointment.status)

        if (
            status == AppointmentStatus.SCHEDULED
            and changes.keys() & _SLOT_FIELDS
            and await check_conflict(
                self.db, doctor_name, appointment_date, exclude_id=appointment_id
            )
        ):
            self._reject(doctor_name, appointment_date)

        for field, value in changes.items():
            setattr(appointment, field, value)
        await self.db.flush()
        return appointment

    async def delete_appointment(self, appointment_id: str) -> None:
        appointment = await self.get_appointment(appointment_id)
        await self.db.delete(appointment)
        await self.db.flush()

    async def get_patient_records(self, patient_id: str) -> PatientRecordsResponse:
        """Local patient with all of their medical records and appointments."""
        patient = await ensure_patient_exists(self.db, patient_id)

        records = await self.db.execute(
            select(MedicalRecord)
            .where(MedicalRecord.patient_id == patient_id)
            .order_by(MedicalRecord.created_at)
        )
        appointments = await self.list_for_patient(patient_id)

        return PatientRecordsResponse.model_validate(
            {
                "patient": patient,
                "medical_records": list(records.scalars().all()),
                "appointments": appointments,
            },
            from_attributes=True,
        )

    @staticmethod
    def _reject(doctor_name, appointment_date) -> NoReturn:
        logger.warning(
            "Appointment slot rejected",
            doctor_name=doctor_name,
            appointment_date=str(appointment_date),
        )
        raise ConflictError(SLOT_TAKEN_MESSAGE)


__all__ = ["AppointmentService"]
