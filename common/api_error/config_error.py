# common/api_error/config_error.py
from typing import Optional, Sequence


class ConfigurationError(RuntimeError):
    """
    Raised when application configuration is invalid or incomplete.

    `problems` keeps the individual field messages so the startup banner
    can list every missing or invalid setting at once.
    """

    def __init__(self, message: str, problems: Optional[Sequence[str]] = None):
        self.problems = list(problems or [])
        super().__init__(message)


__all__ = ["ConfigurationError"]
