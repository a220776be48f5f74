# app/api/v1/auth_router.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.db.models import Role
from app.db.schemas import LoginRequest, TokenResponse, ErrorResponse
from app.services.v1 import CredentialStore, TokenService
from .auth_deps import get_token_service

auth_router = APIRouter(tags=["Auth"])

_LOGIN_RESPONSES = {
    401: {"description": "Invalid email or password", "model": ErrorResponse},
}


async def _login(role: Role, body: LoginRequest, db: AsyncSession, tokens: TokenService) -> TokenResponse:
    store = CredentialStore(db, tokens)
    token, expires_at, _ = await store.authenticate(body.email, body.password, role)
    return TokenResponse(token=token, role=role, expires_at=expires_at)


@auth_router.post(
    "/admin/login",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Admin login",
    responses=_LOGIN_RESPONSES,
)
async def admin_login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    return await _login(Role.ADMIN, body, db, tokens)


@auth_router.post(
    "/worker/login",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Worker login",
    responses=_LOGIN_RESPONSES,
)
async def worker_login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    return await _login(Role.WORKER, body, db, tokens)


__all__ = ["auth_router"]
