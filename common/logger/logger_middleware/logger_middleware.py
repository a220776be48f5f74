# common/logger/logger_middleware/logger_middleware.py
"""
Request logging middleware for FastAPI.
Provides structured logging of all HTTP requests.

Usage Example:
    app.add_middleware(
        RequestLoggingMiddleware,
        environment="development",
        expose_performance_headers=True,
        slow_request_threshold=500,  # Flag requests >500ms
        log_query_params=False,  # Don't log query params (may contain PII)
    )
"""

from typing import Callable, Awaitable, Optional
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
from .request_timer import RequestTimer
from common.context_vars import request_timer_context_var
import time
import uuid

from ..logger import get_app_logger
from .middleware_types import (
    RequestMetadata,
    RequestDetails,
    RequestLogEntry,
    PerformanceBreakdown,
)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for structured request logging.

    Every response carries `X-Request-ID` and `X-Environment`; the
    `Server-Timing` header is added when performance headers are exposed.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        environment: str = "development",
        expose_performance_headers: Optional[bool] = False,
        log_details: bool = True,
        slow_request_threshold: float = 1000.0,
        log_query_params: bool = True,
        log_client_info: bool = True,
        logger_name: Optional[str] = None,
    ):
        """
        Initialize request logging middleware.

        Args:
            app: ASGI application
            environment: Value echoed in the X-Environment header
            expose_performance_headers: Add Server-Timing to responses
            log_details: Whether to log extended details (client IP, principal, etc.)
            slow_request_threshold: Requests slower than this (ms) log as warnings
            log_query_params: Whether to include query parameters (may contain PII)
            log_client_info: Whether to log client IP and User-Agent
            logger_name: Custom logger name (defaults to module name)
        """
        super().__init__(app)
        self.environment = environment
        self.expose_performance_headers = expose_performance_headers
        self.log_details = log_details
        self.slow_request_threshold = slow_request_threshold
        self.log_query_params = log_query_params
        self.log_client_info = log_client_info
        self.logger = get_app_logger(name=logger_name or __name__)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        timer = RequestTimer()
        token = request_timer_context_var.set(timer)
        start_time = time.perf_counter()

        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        try:
            with timer.capture("app"):
                response = await call_next(request)
        finally:
            request_timer_context_var.reset(token)

        duration_ms = (time.perf_counter() - start_time) * 1000
        perf_data = PerformanceBreakdown(
            total_ms=round(duration_ms, 2),
            app_logic_ms=timer.get("app"),
            db_session_ms=timer.get("db"),
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Environment"] = self.environment

        if self.expose_performance_headers:
            timing_header = timer.format_server_timing()
            timing_header += f", total;dur={duration_ms:.2f}"
            response.headers["Server-Timing"] = timing_header

        log_entry = self._build_log_entry(
            request=request,
            response=response,
            duration_ms=duration_ms,
            request_id=request_id,
            perf_data=perf_data,
        )
        self._log_request(log_entry)
        return response

    def _build_log_entry(
        self,
        request: Request,
        response: Response,
        duration_ms: float,
        request_id: str,
        perf_data: Optional[PerformanceBreakdown] = None,
    ) -> RequestLogEntry:
        """Build structured log entry from request/response."""
        metadata = RequestMetadata(
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        details = None
        if self.log_details:
            principal = getattr(request.state, "principal", None)
            details = RequestDetails(
                request_id=request_id,
                client_host=(
                    request.client.host
                    if self.log_client_info and request.client
                    else None
                ),
                user_agent=(
                    request.headers.get("user-agent") if self.log_client_info else None
                ),
                query_params=(
                    dict(request.query_params)
                    if self.log_query_params and request.query_params
                    else None
                ),
                path_params=request.path_params or None,
                principal_id=principal.principal_id if principal else None,
                role=principal.role.value if principal else None,
            )

        return RequestLogEntry(
            metadata=metadata,
            details=details,
            performance=perf_data,
            slow_threshold_ms=self.slow_request_threshold,
        )

    def _log_request(self, log_entry: RequestLogEntry) -> None:
        """
        Log request with appropriate level based on status and duration.

        Strategy:
        - ERROR: 5xx responses
        - WARNING: Slow requests or 4xx errors
        - INFO: Successful requests
        """
        log_data = log_entry.model_dump(mode="json", exclude_none=True)

        if log_entry.is_error:  # type: ignore[truthy-function]
            self.logger.error("Request failed with server error", **log_data)
        elif log_entry.is_slow:  # type: ignore[truthy-function]
            self.logger.warning(
                f"Slow request detected ({log_entry.metadata.duration_ms}ms)",
                **log_data,
            )
        elif log_entry.metadata.status_code >= 400:
            self.logger.warning("Request failed with client error", **log_data)
        else:
            self.logger.info("Request completed", **log_data)


__all__ = ["RequestLoggingMiddleware"]
