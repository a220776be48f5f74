# app/services/v1/credential_store.py
"""
Hashed credentials for admins and workers, and password login.

Passwords are stored as salted one-way hashes produced by werkzeug and
compared with its constant-time check. Login failures never reveal
whether the email or the password was wrong.
"""
from datetime import datetime
from typing import Optional
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from werkzeug.security import generate_password_hash, check_password_hash

from app.db.models import Admin, Worker, Principal, Role, principal_model
from common.api_error import DuplicateEmailError, InvalidCredentialsError
from common.logger import get_app_logger
from .token_service import TokenService

logger = get_app_logger(__name__)

# Compared against on unknown emails so both failure paths cost one hash check
_DUMMY_HASH = generate_password_hash("not-a-real-password")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return check_password_hash(password_hash, password)


class CredentialStore:
    def __init__(self, db: AsyncSession, tokens: Optional[TokenService] = None):
        self.db = db
        self.tokens = tokens

    async def find_by_email(self, email: str, role: Role) -> Optional[Principal]:
        model = principal_model(role)
        query = select(model).where(func.lower(model.email) == normalize_email(email))
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def email_taken(self, email: str, role: Role, exclude_id: Optional[str] = None) -> bool:
        model = principal_model(role)
        query = select(model.id).where(func.lower(model.email) == normalize_email(email))
        if exclude_id is not None:
            query = query.where(model.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.first() is not None

    async def get_principal(self, principal_id: str, role: Role) -> Optional[Principal]:
        """Resolve a verified token subject to a live admin/worker row."""
        return await self.db.get(principal_model(role), principal_id)

    async def authenticate(
        self, email: str, password: str, expected_role: Role
    ) -> tuple[str, datetime, Principal]:
        """
        Check a password login for the given role and issue a session token.

        Returns:
            (token, expires_at, principal)

        Raises:
            InvalidCredentialsError: unknown email or wrong password, identically
        """
        if self.tokens is None:
            raise RuntimeError("CredentialStore needs a TokenService to authenticate")

        principal = await self.find_by_email(email, expected_role)
        if principal is None:
            verify_password(password, _DUMMY_HASH)
            logger.warning("Login rejected", role=expected_role.value)
            raise InvalidCredentialsError()

        if not verify_password(password, principal.password):
            logger.warning("Login rejected", role=expected_role.value)
            raise InvalidCredentialsError()

        token, expires_at = self.tokens.issue(principal.id, expected_role)
        logger.info("Login succeeded", role=expected_role.value, principal_id=principal.id)
        return token, expires_at, principal

    async def create_admin(self, email: str, password: str) -> Admin:
        if await self.email_taken(email, Role.ADMIN):
            raise DuplicateEmailError()
        admin = Admin(email=normalize_email(email), password=hash_password(password))
        self.db.add(admin)
        await self.db.flush()
        return admin

    async def create_worker(self, email: str, password: str, salary: float = 0.0) -> Worker:
        """
        Raises:
            DuplicateEmailError: before any hashing or storage happens
        """
        if await self.email_taken(email, Role.WORKER):
            raise DuplicateEmailError()

        worker = Worker(
            email=normalize_email(email),
            password=hash_password(password),
            salary=salary,
        )
        self.db.add(worker)
        try:
            await self.db.flush()
        except IntegrityError as exc:
            # Lost a race with a concurrent signup for the same email
            raise DuplicateEmailError() from exc
        logger.info("Worker created", worker_id=worker.id)
        return worker


__all__ = [
    "CredentialStore",
    "normalize_email",
    "hash_password",
    "verify_password",
]
