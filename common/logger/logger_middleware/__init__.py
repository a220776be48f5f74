# common/logger/logger_middleware/__init__.py
from .logger_middleware import RequestLoggingMiddleware
from .request_timer import RequestTimer

__all__ = ["RequestLoggingMiddleware", "RequestTimer"]
