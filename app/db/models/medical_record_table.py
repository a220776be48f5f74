# app/db/models/medical_record_table.py
from typing import Optional
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column
from .db_base_model import DbBaseModel, DocumentMixin


class MedicalRecord(DocumentMixin, DbBaseModel):
    __tablename__ = "medical_records"

    # Reference to local_patients.id, no ForeignKey; existence is checked
    # by the referential validator at write time
    patient_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)

    doctor_name: Mapped[str] = mapped_column(String(100), nullable=False)
    diagnosis: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    treatment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


__all__ = ["MedicalRecord"]
