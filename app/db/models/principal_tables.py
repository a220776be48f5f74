# app/db/models/principal_tables.py
from enum import Enum
from typing import Union
from sqlalchemy import String, Float
from sqlalchemy.orm import Mapped, mapped_column
from .db_base_model import DbBaseModel, DocumentMixin


class Role(str, Enum):
    """The only two kinds of principal; carried as the token's role claim."""

    ADMIN = "admin"
    WORKER = "worker"


class PrincipalColumns(DocumentMixin):
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    # Salted one-way hash, never the plaintext
    password: Mapped[str] = mapped_column(String(255), nullable=False)


class Admin(PrincipalColumns, DbBaseModel):
    __tablename__ = "admins"


class Worker(PrincipalColumns, DbBaseModel):
    __tablename__ = "workers"

    salary: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)


Principal = Union[Admin, Worker]


def principal_model(role: Role) -> type[Admin] | type[Worker]:
    if role is Role.ADMIN:
        return Admin
    if role is Role.WORKER:
        return Worker
    raise ValueError(f"Unknown role: {role!r}")


__all__ = ["Role", "Admin", "Worker", "Principal", "principal_model"]
