# common/config/env_config.py
import os
from typing import Optional
from common.api_error import ConfigurationError
from .config_types import EnvBool


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get Env variable with optional default
    """
    return os.getenv(name, default=default)


def require_env(name: str) -> str:
    """
    Get required environment variable or raise immediately.
    """
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(f"Missing required env variables: {name}")
    return value


def get_env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got: {raw}") from exc


def get_env_bool(name: str, default: EnvBool = EnvBool.FALSE) -> bool:
    """Parse a true/false env variable; anything else is a configuration error."""
    raw = (os.getenv(name) or default.value).strip().lower()
    try:
        return EnvBool(raw) == EnvBool.TRUE
    except ValueError as exc:
        valid = [b.value for b in EnvBool]
        raise ConfigurationError(
            f"Invalid {name}: {raw}. Must be one of: {valid}"
        ) from exc


def get_env_list(name: str, default: str = "") -> list[str]:
    """Comma-separated env variable as a list, blanks dropped."""
    raw = os.getenv(name) or default
    return [item.strip() for item in raw.split(",") if item.strip()]


__all__ = ["require_env", "get_env", "get_env_int", "get_env_bool", "get_env_list"]
