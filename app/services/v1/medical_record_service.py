# app/services/v1/medical_record_service.py
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import MedicalRecord
from app.db.schemas import MedicalRecordCreate, MedicalRecordUpdate
from common.api_error import NotFoundError
from common.logger import get_app_logger
from .patient_service import reject_null_required
from .referential_validator import ensure_patient_exists

logger = get_app_logger(__name__)


class MedicalRecordService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_records(self) -> list[MedicalRecord]:
        result = await self.db.execute(select(MedicalRecord).order_by(MedicalRecord.created_at))
        return list(result.scalars().all())

    async def list_for_patient(self, patient_id: str) -> list[MedicalRecord]:
        """Records for one patient. An unknown patient simply has none."""
        query = (
            select(MedicalRecord)
            .where(MedicalRecord.patient_id == patient_id)
            .order_by(MedicalRecord.created_at)
            .execution_options(logging_token="MedicalRecordService.list_for_patient")
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_record(self, record_id: str) -> MedicalRecord:
        record = await self.db.get(MedicalRecord, record_id)
        if record is None:
            raise NotFoundError("Medical record not found")
        return record

    async def create_record(self, data: MedicalRecordCreate) -> MedicalRecord:
        await ensure_patient_exists(self.db, data.patient_id)

        record = MedicalRecord(**data.model_dump())
        self.db.add(record)
        await self.db.flush()
        logger.info("Medical record created", record_id=record.id, patient_id=record.patient_id)
        return record

    async def update_record(self, record_id: str, data: MedicalRecordUpdate) -> MedicalRecord:
        record = await self.get_record(record_id)
        changes = data.model_dump(exclude_unset=True)
        reject_null_required(changes, ("patient_id", "doctor_name"))

        if "patient_id" in changes:
            await ensure_patient_exists(self.db, changes["patient_id"])

        for field, value in changes.items():
            setattr(record, field, value)
        await self.db.flush()
        return record

    async def delete_record(self, record_id: str) -> None:
        record = await self.get_record(record_id)
        await self.db.delete(record)
        await self.db.flush()


__all__ = ["MedicalRecordService"]
