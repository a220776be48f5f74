# app/services/v1/patient_service.py
from typing import Any, Optional, Union
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Patient, LocalPatient
from app.db.schemas import (
    PatientCreate,
    PatientUpdate,
    PatientSyncItem,
    SyncError,
    SyncPatientsResponse,
)
from common.api_error import ConflictError, NotFoundError, ValidationError
from common.logger import get_app_logger

logger = get_app_logger(__name__)

PatientModel = Union[type[Patient], type[LocalPatient]]

# Columns that may not be cleared with an explicit null
_REQUIRED_FIELDS = ("first_name", "last_name", "date_of_birth")


def _normalize_email(email: Optional[str]) -> Optional[str]:
    return email.strip().lower() if email else None


def reject_null_required(changes: dict[str, Any], required: tuple[str, ...]) -> None:
    """
    Partial updates apply only the fields that were sent; sending null for a
    non-nullable column is a validation error rather than a silent no-op.
    """
    for field in required:
        if field in changes and changes[field] is None:
            raise ValidationError(f"{field} cannot be null")


class PatientService:
    """
    Patient CRUD over either patient table.

    `Patient` backs the identity service's /patients directory,
    `LocalPatient` backs the clinical service's /local-patients copy.
    """

    def __init__(self, db: AsyncSession, model: PatientModel = Patient):
        self.db = db
        self.model = model

    async def list_patients(self) -> list[Any]:
        query = (
            select(self.model)
            .order_by(self.model.created_at)
            .execution_options(logging_token="PatientService.list_patients")
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_patient(self, patient_id: str) -> Any:
        """
        Raises:
            NotFoundError: unknown id
        """
        patient = await self.db.get(self.model, patient_id)
        if patient is None:
            raise NotFoundError("Patient not found")
        return patient

    async def email_taken(self, email: str, exclude_id: Optional[str] = None) -> bool:
        query = select(self.model.id).where(
            func.lower(self.model.email) == _normalize_email(email)
        )
        if exclude_id is not None:
            query = query.where(self.model.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.first() is not None

    async def create_patient(self, data: PatientCreate) -> Any:
        values = data.model_dump()
        values["email"] = _normalize_email(values.get("email"))

        if values["email"] and await self.email_taken(values["email"]):
            raise ConflictError("A patient with this email already exists")

        patient = self.model(**values)
        self.db.add(patient)
        await self._flush()
        logger.info("Patient created", table=self.model.__tablename__, patient_id=patient.id)
        return patient

    async def update_patient(self, patient_id: str, data: PatientUpdate) -> Any:
        patient = await self.get_patient(patient_id)
        changes = data.model_dump(exclude_unset=True)
        reject_null_required(changes, _REQUIRED_FIELDS)

        if "email" in changes:
            changes["email"] = _normalize_email(changes["email"])
            if changes["email"] and await self.email_taken(changes["email"], exclude_id=patient_id):
                raise ConflictError("A patient with this email already exists")

        for field, value in changes.items():
            setattr(patient, field, value)
        await self._flush()
        return patient

    async def delete_patient(self, patient_id: str) -> None:
        patient = await self.get_patient(patient_id)
        await self.db.delete(patient)
        await self.db.flush()
        logger.info("Patient deleted", table=self.model.__tablename__, patient_id=patient_id)

    async def sync_patients(self, batch: list[PatientSyncItem]) -> SyncPatientsResponse:
        """
        Bulk-insert patients, keeping the directory ids when supplied.

        Rows whose id or email already exists, in the table or earlier in the
        same batch, are skipped and reported; every other row is inserted.
        A batch with skipped rows is still a successful sync.
        """
        ids = [item.id for item in batch if item.id]
        emails = [_normalize_email(item.email) for item in batch if item.email]

        existing_ids: set[str] = set()
        if ids:
            result = await self.db.execute(select(self.model.id).where(self.model.id.in_(ids)))
            existing_ids = set(result.scalars().all())

        existing_emails: set[str] = set()
        if emails:
            result = await self.db.execute(
                select(func.lower(self.model.email)).where(func.lower(self.model.email).in_(emails))
            )
            existing_emails = set(result.scalars().all())

        to_insert = []
        errors: list[SyncError] = []
        for index, item in enumerate(batch):
            values = item.model_dump(exclude_none=True)
            email = _normalize_email(item.email)

            if item.id and item.id in existing_ids:
                errors.append(SyncError(index=index, id=item.id, email=email, message="Duplicate id"))
                continue
            if email and email in existing_emails:
                errors.append(SyncError(index=index, id=item.id, email=email, message="Duplicate email"))
                continue

            if email:
                values["email"] = email
                existing_emails.add(email)
            if item.id:
                existing_ids.add(item.id)
            to_insert.append(self.model(**values))

        self.db.add_all(to_insert)
        await self._flush()

        if errors:
            logger.warning(
                "Patient sync completed with duplicates",
                added=len(to_insert),
                skipped=len(errors),
            )
            message = "Patient synchronization completed with duplicates"
        else:
            logger.info("Patient sync completed", added=len(to_insert))
            message = "Patient synchronization completed"

        return SyncPatientsResponse(message=message, added=len(to_insert), errors=errors)

    async def _flush(self) -> None:
        try:
            await self.db.flush()
        except IntegrityError as exc:
            # A concurrent write claimed the same id or email
            raise ConflictError("A patient with this id or email already exists") from exc


__all__ = ["PatientService", "reject_null_required"]
