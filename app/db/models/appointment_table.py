# app/db/models/appointment_table.py
from datetime import datetime
from enum import Enum
from sqlalchemy import String, DateTime, Index, Enum as sqlalchemy_Enum
from sqlalchemy.orm import Mapped, mapped_column
from .db_base_model import DbBaseModel, DocumentMixin


class AppointmentStatus(str, Enum):
    SCHEDULED = "Scheduled"  # Holds the doctor's slot
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    NO_SHOW = "No-Show"  # Appointment time passed without arrival


class Appointment(DocumentMixin, DbBaseModel):
    __tablename__ = "appointments"
    __table_args__ = (
        # Backs the conflict lookup; not unique, cancelled rows may share a slot
        Index("ix_appointments_slot", "doctor_name", "appointment_date", "status"),
    )

    # Reference to local_patients.id, no ForeignKey (see MedicalRecord)
    patient_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)

    doctor_name: Mapped[str] = mapped_column(String(100), nullable=False)

    appointment_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    status: Mapped[AppointmentStatus] = mapped_column(
        sqlalchemy_Enum(
            AppointmentStatus,
            name="appointment_status",
            values_callable=lambda enum_cls: [m.value for m in enum_cls],
        ),
        nullable=False,
        default=AppointmentStatus.SCHEDULED,
    )


__all__ = ["Appointment", "AppointmentStatus"]
