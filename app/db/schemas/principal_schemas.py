# app/db/schemas/principal_schemas.py
from pydantic import Field, EmailStr
from datetime import datetime
from typing import Optional
from ..models import Role
from .base_schema import CamelModel


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(CamelModel):
    token: str
    role: Role
    expires_at: datetime


class WorkerCreate(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    salary: float = Field(0.0, ge=0)


class WorkerUpdate(CamelModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6, max_length=128)
    salary: Optional[float] = Field(None, ge=0)


class WorkerResponse(CamelModel):
    # password deliberately absent
    id: str
    email: EmailStr
    salary: float
    created_at: datetime


__all__ = [
    "LoginRequest",
    "TokenResponse",
    "WorkerCreate",
    "WorkerUpdate",
    "WorkerResponse",
]
