# main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime, timedelta, timezone
from contextlib import asynccontextmanager
from typing import Any, Optional

from dotenv import load_dotenv
from common.config import (
    AppConfig,
    ServiceKind,
    configure_structlog,
    get_config,
    initialize_config,
    is_config_initialized,
)
from common.logger import get_app_logger
from common.logger.logger_middleware import RequestLoggingMiddleware
from common.api_error import AppError, DatabaseError
from app.db import DbManager
from app.db.schemas import HealthCheckResponse, EnvironmentResponse, ErrorResponse
from app.services.v1 import TokenService, ensure_default_admin
from app.api.v1 import (
    auth_router,
    patient_router,
    worker_router,
    local_patient_router,
    medical_record_router,
    appointment_router,
    patient_records_router,
)

logger = get_app_logger(name=__name__)

_ROUTERS = {
    ServiceKind.PATIENTS: [auth_router, patient_router, worker_router],
    ServiceKind.CLINICAL: [
        local_patient_router,
        medical_record_router,
        appointment_router,
        patient_records_router,
    ],
}


def _now() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


def _error_body(message: str, code: str, **extra: Any) -> dict[str, Any]:
    return {"message": message, "error": code, "timestamp": _now(), **extra}


def _build_lifespan(service: ServiceKind, config: AppConfig):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _db_config = config.database
        if not _db_config:
            raise RuntimeError("Database configuration required")

        logger.info("Starting service", service=service.value, database=_db_config.to_dict_safe())

        db_manager = DbManager.from_config(_db_config)
        await db_manager.verify_connection()

        if _db_config.auto_create:
            await db_manager.create_schema()
        else:
            # Ensure migrations are up-to-date (fail fast if not)
            try:
                await db_manager.verify_migrations_current()
                logger.info("✓ All migrations applied")
            except RuntimeError as e:
                logger.error(f"❌ Migration check failed: {e}")
                logger.error("Run 'alembic upgrade head'")
                await db_manager.dispose()
                raise

        app.state.db_manager = db_manager
        app.state.token_service = TokenService(
            config.auth.jwt_secret.get_secret_value(),
            algorithm=config.auth.jwt_algorithm,
            default_ttl=timedelta(hours=config.auth.token_ttl_hours),
        )

        if service == ServiceKind.PATIENTS:
            await ensure_default_admin(
                db_manager,
                config.auth.default_admin_email,
                config.auth.default_admin_password.get_secret_value(),
            )

        yield
        logger.info("shutting down", service=service.value)
        await db_manager.dispose()

    return lifespan


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            f"Domain Error: {exc.code}",
            path=request.url.path,
            error_code=exc.code,
            message=exc.message,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.code),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "loc": [str(part) for part in err.get("loc", ())],
                "msg": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in exc.errors()
        ]
        logger.warning("Request validation failed", path=request.url.path, errors=len(errors))
        return JSONResponse(
            status_code=400,
            content=_error_body("Request validation failed", "VALIDATION_ERROR", errors=errors),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail), f"HTTP_{exc.status_code}"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Unhandled database error", path=request.url.path)
        err = DatabaseError()
        return JSONResponse(
            status_code=err.status_code,
            content=_error_body(err.message, err.code),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", path=request.url.path, error_type=type(exc).__name__)
        return JSONResponse(
            status_code=500,
            content=_error_body("Internal server error", "INTERNAL_ERROR"),
        )


def create_app(service: ServiceKind, config: Optional[AppConfig] = None) -> FastAPI:
    """
    Build one of the two HTTP services.

    Args:
        service: which router set to mount
        config: validated configuration; defaults to the process singleton
            set by initialize_config()
    """
    config = config or get_config()
    configure_structlog(config.logging.level_int)

    app = FastAPI(
        title=f"{config.app_title} - {service.display_name}",
        version=config.app_version,
        description=f"Running in {config.environment} environment",
        lifespan=_build_lifespan(service, config),
    )
    app.state.config = config
    app.state.service = service
    app.state.owns_credentials = service == ServiceKind.PATIENTS

    app.add_middleware(
        RequestLoggingMiddleware,
        environment=config.environment.value,
        expose_performance_headers=not config.environment.is_production,
        slow_request_threshold=config.api.slow_request_threshold_ms,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.api.cors_origins),
        allow_credentials="*" not in config.api.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Environment", "Server-Timing"],
    )
    _register_exception_handlers(app)

    for router in _ROUTERS[service]:
        app.include_router(router)

    @app.get(
        "/health",
        response_model=HealthCheckResponse,
        tags=["System"],
        responses={
            200: {"description": "System is healthy", "model": HealthCheckResponse},
            503: {"description": "Database unreachable", "model": HealthCheckResponse},
            500: {"description": "Unexpected server error", "model": ErrorResponse},
        },
    )
    async def check_health(request: Request):
        db_status = await request.app.state.db_manager.health_check()
        healthy = db_status.get("healthy", False)
        body = HealthCheckResponse(
            status=f"{service.display_name} is {'healthy' if healthy else 'unhealthy'}",
            environment=config.environment.value,
            timestamp=datetime.now(tz=timezone.utc),
            version=config.app_version,
            database=db_status,
            log_level=config.logging.level_value,
        )
        if not healthy:
            logger.error("Health check failed", endpoint="/health", error=db_status.get("error"))
            return JSONResponse(status_code=503, content=body.model_dump(mode="json"))
        return body

    @app.get("/environment", response_model=EnvironmentResponse, tags=["System"])
    async def environment_info():
        return EnvironmentResponse(
            environment=config.environment.value,
            service=service.display_name,
            version=config.app_version,
        )

    return app


def _app_from_env(service: ServiceKind) -> FastAPI:
    # Reloader workers import this module fresh and must load config themselves
    if not is_config_initialized():
        load_dotenv()
        initialize_config()
    return create_app(service)


def patients_app() -> FastAPI:
    return _app_from_env(ServiceKind.PATIENTS)


def clinical_app() -> FastAPI:
    return _app_from_env(ServiceKind.CLINICAL)


__all__ = ["create_app", "patients_app", "clinical_app"]
