# app/services/v1/referential_validator.py
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import LocalPatient
from common.api_error import NotFoundError


async def ensure_patient_exists(session: AsyncSession, patient_id: str) -> LocalPatient:
    """
    Resolve a patientId against the clinical service's own patient table.
    Must run before any medical record or appointment write that carries
    a patientId.

    Raises:
        NotFoundError: no local patient with that id
    """
    patient = await session.get(LocalPatient, patient_id)
    if patient is None:
        raise NotFoundError("Patient not found")
    return patient


__all__ = ["ensure_patient_exists"]
