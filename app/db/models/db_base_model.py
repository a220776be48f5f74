# app/db/models/db_base_model.py
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import DateTime, String
from datetime import datetime, timezone
from uuid import uuid4


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class DbBaseModel(DeclarativeBase):
    @staticmethod
    def generate_uuid() -> str:
        return str(uuid4())


class DocumentMixin:
    """
    Columns shared by every stored entity: a uuid string id and a UTC
    creation timestamp.
    """

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=DbBaseModel.generate_uuid,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,  # evaluated per insert, always UTC
        nullable=False,
    )


__all__ = ["DbBaseModel", "DocumentMixin", "utc_now"]
