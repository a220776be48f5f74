# common/logger/logger.py
"""
Application logger with explicit initialization.

Usage:
    from common.logger import get_app_logger

    logger = get_app_logger(__name__)
    logger.info("Appointment created", appointment_id=appointment.id)

    # Carry context into every following call
    audit = logger.bind(principal_id=principal.id, role=principal.role)
    audit.warning("Worker token used on admin route")
"""

from typing import Any, Optional
import structlog

from common.config.structlog_config import get_logger as _get_structlog_logger


class AppLogger:
    """
    Application logger wrapper.

    Provides a type-safe interface to structlog. The underlying logger is
    resolved on first use so module-level loggers can be created before
    configure_structlog() runs.
    """

    def __init__(self, name: str = "app", context: Optional[dict[str, Any]] = None) -> None:
        self._name = name
        self._context = dict(context or {})
        self._logger_instance: Optional[structlog.BoundLogger] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def _logger(self) -> structlog.BoundLogger:
        """
        Lazy-load logger instance.
        This ensures structlog is configured before first use.
        """
        if self._logger_instance is None:
            logger = _get_structlog_logger(self._name)
            if self._context:
                logger = logger.bind(**self._context)
            self._logger_instance = logger
        return self._logger_instance

    def bind(self, **kwargs: Any) -> "AppLogger":
        """Return a new logger carrying extra key/values on every event."""
        return AppLogger(self._name, {**self._context, **kwargs})

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._logger.debug(msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._logger.info(msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._logger.warning(msg, **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._logger.error(msg, **kwargs)

    def critical(self, msg: str, **kwargs: Any) -> None:
        self._logger.critical(msg, **kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log at error level with the active exception attached."""
        self._logger.error(msg, exc_info=True, **kwargs)


def get_app_logger(name: str = "app") -> AppLogger:
    """
    Get application logger instance.

    Example:
        >>> logger = get_app_logger("app.services.v1.appointment_service")
        >>> logger.info("Slot rejected", doctor_name="Dr. Lee")
    """
    return AppLogger(name=name)


# Convenience instance for simple usage
logger = get_app_logger()

__all__ = ["logger", "AppLogger", "get_app_logger"]
