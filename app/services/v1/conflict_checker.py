# app/services/v1/conflict_checker.py
"""
Double-booking detection for appointments.

A slot is a (doctor_name, appointment_date) pair compared for exact
equality. Only Scheduled appointments hold a slot; Cancelled, Completed
and No-Show rows never conflict.

The lookup and the following insert/update are not one atomic step, so two
concurrent writes for the same free slot can both pass.
"""
from datetime import datetime
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Appointment, AppointmentStatus
from app.db.schemas import as_utc

SLOT_TAKEN_MESSAGE = "This time slot is already booked"


async def check_conflict(
    session: AsyncSession,
    doctor_name: str,
    appointment_date: datetime,
    exclude_id: Optional[str] = None,
) -> bool:
    """
    True when another Scheduled appointment already holds the slot.

    Args:
        exclude_id: the appointment being updated, so it never conflicts
            with itself
    """
    query = (
        select(Appointment.id)
        .where(
            Appointment.doctor_name == doctor_name,
            Appointment.appointment_date == as_utc(appointment_date),
            Appointment.status == AppointmentStatus.SCHEDULED,
        )
        .execution_options(logging_token="ConflictChecker.check_conflict")
    )
    if exclude_id is not None:
        query = query.where(Appointment.id != exclude_id)

    result = await session.execute(query.limit(1))
    return result.first() is not None


__all__ = ["check_conflict", "SLOT_TAKEN_MESSAGE"]
