# app/db/models/patient_table.py
from datetime import date
from enum import Enum
from typing import Optional
from sqlalchemy import String, Date, Enum as sqlalchemy_Enum
from sqlalchemy.orm import Mapped, mapped_column
from .db_base_model import DbBaseModel, DocumentMixin


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


def _enum_values(enum_cls: type[Enum]) -> list[str]:
    # Persist "Male"/"No-Show", not the member names
    return [member.value for member in enum_cls]


class PatientColumns(DocumentMixin):
    """Identity columns shared by both patient tables."""

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)

    gender: Mapped[Optional[Gender]] = mapped_column(
        sqlalchemy_Enum(
            Gender,
            name="patient_gender",
            values_callable=_enum_values,
        ),
        nullable=True,
    )

    contact_number: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    # NULLs don't collide under a unique constraint
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, unique=True)


class Patient(PatientColumns, DbBaseModel):
    """Patient Directory entry, owned by the patients service."""

    __tablename__ = "patients"


class LocalPatient(PatientColumns, DbBaseModel):
    """
    The clinical service's own patient copy, used for referential checks
    without calling the patients service. Written independently (directly
    or via /sync-patients) and allowed to diverge from `patients`.
    """

    __tablename__ = "local_patients"


__all__ = ["Gender", "Patient", "LocalPatient", "PatientColumns"]
