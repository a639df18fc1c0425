"""
Runtime Configuration

Settings are read from ORDER_SERVICE_* environment variables once, at import
time. Anything not set falls back to a development-friendly default.
"""
import os
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

ENV_PREFIX = "ORDER_SERVICE_"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(f"{ENV_PREFIX}{name}", default)


def _env_bool(name: str, default: bool = False) -> bool:
    """
    Read a boolean flag.

    Returns:
        True if the variable is 'true', '1' or 'yes' (case-insensitive)
    """
    raw = _env(name)
    if raw is None:
        return default
    return raw.strip().lower() in ('true', '1', 'yes')


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {ENV_PREFIX}{name}={raw!r}, using {default}")
        return default


class AppConfig:
    """Resolved application settings"""

    DATABASE_URL: str = _env("DATABASE_URL", "sqlite:///./orders.db")
    SQL_ECHO: bool = _env_bool("SQL_ECHO")

    LOG_LEVEL: str = (_env("LOG_LEVEL", "INFO") or "INFO").upper()
    LOG_DIR: Optional[Path] = Path(_env("LOG_DIR")) if _env("LOG_DIR") else None
    LOG_FILE_NAME = "order-service.log"

    HOST: str = _env("HOST", "0.0.0.0")
    PORT: int = _env_int("PORT", 8080)

    @classmethod
    def log_file(cls) -> Optional[Path]:
        """Path of the rotating log file, or None when file logging is off"""
        if cls.LOG_DIR is None:
            return None
        return cls.LOG_DIR / cls.LOG_FILE_NAME
