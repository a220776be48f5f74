"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

GENDER_VALUES = ("Male", "Female", "Other")
STATUS_VALUES = ("Scheduled", "Completed", "Cancelled", "No-Show")


def _document_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _patient_table(name: str) -> None:
    op.create_table(
        name,
        *_document_columns(),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=False),
        sa.Column(
            "gender",
            sa.Enum(*GENDER_VALUES, name="patient_gender"),
            nullable=True,
        ),
        sa.Column("contact_number", sa.String(length=32), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True, unique=True),
    )


def _principal_table(name: str, *extra: sa.Column) -> None:
    op.create_table(
        name,
        *_document_columns(),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("password", sa.String(length=255), nullable=False),
        *extra,
    )


def upgrade() -> None:
    _patient_table("patients")
    _patient_table("local_patients")

    op.create_table(
        "medical_records",
        *_document_columns(),
        sa.Column("patient_id", sa.String(length=36), nullable=False),
        sa.Column("doctor_name", sa.String(length=100), nullable=False),
        sa.Column("diagnosis", sa.Text(), nullable=True),
        sa.Column("treatment", sa.Text(), nullable=True),
    )
    op.create_index("ix_medical_records_patient_id", "medical_records", ["patient_id"])

    op.create_table(
        "appointments",
        *_document_columns(),
        sa.Column("patient_id", sa.String(length=36), nullable=False),
        sa.Column("doctor_name", sa.String(length=100), nullable=False),
        sa.Column("appointment_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "status",
            sa.Enum(*STATUS_VALUES, name="appointment_status"),
            nullable=False,
        ),
    )
    op.create_index("ix_appointments_patient_id", "appointments", ["patient_id"])
    op.create_index(
        "ix_appointments_slot",
        "appointments",
        ["doctor_name", "appointment_date", "status"],
    )

    _principal_table("admins")
    _principal_table(
        "workers",
        sa.Column("salary", sa.Float(), nullable=False, server_default="0"),
    )


def downgrade() -> None:
    op.drop_table("workers")
    op.drop_table("admins")
    op.drop_index("ix_appointments_slot", table_name="appointments")
    op.drop_index("ix_appointments_patient_id", table_name="appointments")
    op.drop_table("appointments")
    op.drop_index("ix_medical_records_patient_id", table_name="medical_records")
    op.drop_table("medical_records")
    op.drop_table("local_patients")
    op.drop_table("patients")
    # Named enum types outlive their tables on PostgreSQL
    bind = op.get_bind()
    sa.Enum(name="appointment_status").drop(bind, checkfirst=True)
    sa.Enum(name="patient_gender").drop(bind, checkfirst=True)
