# app/api/v1/worker_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.schemas import (
    WorkerCreate,
    WorkerUpdate,
    WorkerResponse,
    MessageResponse,
    ErrorResponse,
)
from app.services.v1 import WorkerService
from app.db import get_db
from .auth_deps import require_admin

worker_router = APIRouter(
    prefix="/workers",
    tags=["Workers"],
    dependencies=[Depends(require_admin)],
    responses={403: {"description": "Admin role required", "model": ErrorResponse}},
)


@worker_router.get("", response_model=list[WorkerResponse])
async def list_workers(db: AsyncSession = Depends(get_db)):
    return await WorkerService(db).list_workers()


@worker_router.get(
    "/{worker_id}",
    response_model=WorkerResponse,
    responses={404: {"description": "Worker not found", "model": ErrorResponse}},
)
async def get_worker(worker_id: str, db: AsyncSession = Depends(get_db)):
    return await WorkerService(db).get_worker(worker_id)


@worker_router.post(
    "",
    response_model=WorkerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a worker account",
    responses={409: {"description": "Email already registered", "model": ErrorResponse}},
)
async def create_worker(body: WorkerCreate, db: AsyncSession = Depends(get_db)):
    return await WorkerService(db).create_worker(body)


@worker_router.put(
    "/{worker_id}",
    response_model=WorkerResponse,
    responses={
        404: {"description": "Worker not found", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
)
async def update_worker(
    worker_id: str, body: WorkerUpdate, db: AsyncSession = Depends(get_db)
):
    return await WorkerService(db).update_worker(worker_id, body)


@worker_router.delete(
    "/{worker_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Worker not found", "model": ErrorResponse}},
)
async def delete_worker(worker_id: str, db: AsyncSession = Depends(get_db)):
    await WorkerService(db).delete_worker(worker_id)
    return MessageResponse(message="Worker deleted")


__all__ = ["worker_router"]
