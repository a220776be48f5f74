# app/api/v1/auth_deps.py
"""
Bearer-token guards for gated routes.

Tokens are verified against the shared signing secret. On the service that
owns the credential tables (`app.state.owns_credentials`) the principal must
also still exist, so deleting a worker revokes their token there.

Usage:
    @router.get("/workers", dependencies=[Depends(require_roles(Role.ADMIN))])

The verified claims are stored on `request.state.principal` so the request
logging middleware can attribute the request.
"""
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_db
from app.db.models import Role
from app.services.v1 import CredentialStore, TokenClaims, TokenService
from common.api_error import ForbiddenError, UnauthorizedError

_bearer = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    service = getattr(request.app.state, "token_service", None)
    if service is None:
        raise RuntimeError("TokenService not found in app.state. Ensure lifespan is configured.")
    return service


def require_roles(*roles: Role):
    """Dependency factory admitting only principals holding one of `roles`."""
    allowed = frozenset(roles)

    async def dependency(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
        tokens: TokenService = Depends(get_token_service),
        db: AsyncSession = Depends(get_db),
    ) -> TokenClaims:
        if credentials is None:
            raise UnauthorizedError("Missing bearer token")

        claims = tokens.verify(credentials.credentials)
        request.state.principal = claims

        if claims.role not in allowed:
            raise ForbiddenError()

        # Only the service holding the admins/workers tables can confirm the
        # account still exists; elsewhere the signed claims are the whole proof
        if getattr(request.app.state, "owns_credentials", False):
            principal = await CredentialStore(db).get_principal(claims.principal_id, claims.role)
            if principal is None:
                raise UnauthorizedError("Account no longer exists", code="INVALID_TOKEN")
        return claims

    return dependency


require_admin = require_roles(Role.ADMIN)
require_staff = require_roles(Role.ADMIN, Role.WORKER)

__all__ = ["require_roles", "require_admin", "require_staff", "get_token_service"]
