# app/services/v1/token_service.py
"""
Session token issuing and verification.

Tokens are HS256 JWTs carrying the principal id (`sub`), the role claim
and an expiry. Nothing is persisted: there is no refresh, rotation or
revocation list, so a token stays valid until `exp` passes.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt

from app.db.models import Role
from common.api_error import UnauthorizedError

DEFAULT_TOKEN_TTL = timedelta(hours=24)


@dataclass(frozen=True)
class TokenClaims:
    principal_id: str
    role: Role
    expires_at: datetime


class TokenService:
    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        default_ttl: timedelta = DEFAULT_TOKEN_TTL,
    ):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self.default_ttl = default_ttl

    def issue(
        self,
        principal_id: str,
        role: Role,
        ttl: Optional[timedelta] = None,
    ) -> tuple[str, datetime]:
        """
        Sign a token for `principal_id` with the given role.

        Returns:
            (token, expires_at)
        """
        issued_at = datetime.now(tz=timezone.utc)
        expires_at = issued_at + (ttl if ttl is not None else self.default_ttl)
        payload = {
            "sub": principal_id,
            "role": Role(role).value,
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return token, expires_at

    def verify(self, token: str) -> TokenClaims:
        """
        Raises:
            UnauthorizedError: bad signature, malformed token, unknown role
                claim or elapsed expiry
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "role", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise UnauthorizedError("Token expired", code="TOKEN_EXPIRED") from exc
        except jwt.InvalidTokenError as exc:
            raise UnauthorizedError("Invalid token", code="INVALID_TOKEN") from exc

        try:
            role = Role(payload["role"])
        except ValueError as exc:
            raise UnauthorizedError("Invalid token", code="INVALID_TOKEN") from exc

        principal_id = payload["sub"]
        if not isinstance(principal_id, str) or not principal_id:
            raise UnauthorizedError("Invalid token", code="INVALID_TOKEN")

        return TokenClaims(
            principal_id=principal_id,
            role=role,
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )


__all__ = ["TokenService", "TokenClaims", "DEFAULT_TOKEN_TTL"]
