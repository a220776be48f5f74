# app/db/models/__init__.py
from .db_base_model import DbBaseModel, DocumentMixin, utc_now
from .patient_table import Gender, Patient, LocalPatient
from .medical_record_table import MedicalRecord
from .appointment_table import Appointment, AppointmentStatus
from .principal_tables import Role, Admin, Worker, Principal, principal_model

__all__ = [
    "DbBaseModel",
    "DocumentMixin",
    "utc_now",
    "Gender",
    "Patient",
    "LocalPatient",
    "MedicalRecord",
    "Appointment",
    "AppointmentStatus",
    "Role",
    "Admin",
    "Principal",
    "principal_model",
    "Worker",
]
