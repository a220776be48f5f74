# common/api_error/ApiError.py
class AppError(Exception):
    """Base error for all application-specific issues."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "INTERNAL_ERROR",
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing required field."""

    def __init__(self, message: str):
        super().__init__(message, status_code=400, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Unknown id or unresolved reference."""

    def __init__(self, message: str):
        super().__init__(message, status_code=404, code="NOT_FOUND")


class ConflictError(AppError):
    """Double-booked slot or duplicate unique field."""

    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(message, status_code=409, code=code)


class DuplicateEmailError(ConflictError):
    def __init__(self, message: str = "Email already registered"):
        super().__init__(message, code="DUPLICATE_EMAIL")


class UnauthorizedError(AppError):
    """Missing, malformed, forged or expired credentials."""

    def __init__(self, message: str = "Not authenticated", code: str = "UNAUTHORIZED"):
        super().__init__(message, status_code=401, code=code)


class InvalidCredentialsError(UnauthorizedError):
    """
    Login failure.

    Raised with the same message whether the email is unknown or the
    password is wrong.
    """

    def __init__(self) -> None:
        super().__init__("Invalid email or password", code="INVALID_CREDENTIALS")


class ForbiddenError(AppError):
    """Authenticated principal holds the wrong role for the route."""

    def __init__(self, message: str = "Forbidden for this role"):
        super().__init__(message, status_code=403, code="FORBIDDEN")


class DatabaseError(AppError):
    """Specific for DB issues."""

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message, status_code=500, code="DATABASE_ERROR")


__all__ = [
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "DuplicateEmailError",
    "UnauthorizedError",
    "InvalidCredentialsError",
    "ForbiddenError",
    "DatabaseError",
]
