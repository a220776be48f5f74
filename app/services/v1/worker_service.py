# app/services/v1/worker_service.py
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Role, Worker
from app.db.schemas import WorkerCreate, WorkerUpdate
from common.api_error import DuplicateEmailError, NotFoundError
from common.logger import get_app_logger
from .credential_store import CredentialStore, hash_password, normalize_email
from .patient_service import reject_null_required

logger = get_app_logger(__name__)


class WorkerService:
    """Admin-side worker management. Credentials go through CredentialStore."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.credentials = CredentialStore(db)

    async def list_workers(self) -> list[Worker]:
        result = await self.db.execute(select(Worker).order_by(Worker.created_at))
        return list(result.scalars().all())

    async def get_worker(self, worker_id: str) -> Worker:
        worker = await self.db.get(Worker, worker_id)
        if worker is None:
            raise NotFoundError("Worker not found")
        return worker

    async def create_worker(self, data: WorkerCreate) -> Worker:
        return await self.credentials.create_worker(data.email, data.password, data.salary)

    async def update_worker(self, worker_id: str, data: WorkerUpdate) -> Worker:
        worker = await self.get_worker(worker_id)
        changes = data.model_dump(exclude_unset=True)
        reject_null_required(changes, ("email", "password", "salary"))

        if "email" in changes:
            if await self.credentials.email_taken(changes["email"], Role.WORKER, exclude_id=worker_id):
                raise DuplicateEmailError()
            worker.email = normalize_email(changes["email"])
        if "password" in changes:
            worker.password = hash_password(changes["password"])
        if "salary" in changes:
            worker.salary = changes["salary"]

        try:
            await self.db.flush()
        except IntegrityError as exc:
            # Lost a race with a concurrent change to the same email
            raise DuplicateEmailError() from exc
        logger.info("Worker updated", worker_id=worker_id, fields=sorted(changes))
        return worker

    async def delete_worker(self, worker_id: str) -> None:
        worker = await self.get_worker(worker_id)
        await self.db.delete(worker)
        await self.db.flush()
        logger.info("Worker deleted", worker_id=worker_id)


__all__ = ["WorkerService"]
