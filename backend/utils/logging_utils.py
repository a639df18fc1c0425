"""
Logging Utilities

Configures the root logger and carries a request-scoped context (the request
id) into every log record emitted while a request is being handled.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from config.app_config import AppConfig


# Context variable for request-scoped logging context
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s'

_configured = False


class RequestContextFilter(logging.Filter):
    """Copies the current logging context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = _logging_context.get()
        record.request_id = context.get("request_id", "-")
        for key, value in context.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


def set_logging_context(**kwargs):
    """
    Set logging context for the current request/operation.

    Example:
        set_logging_context(request_id="abc-123", order_id="...")
    """
    context = _logging_context.get().copy()
    context.update(kwargs)
    _logging_context.set(context)


def clear_logging_context():
    """Clear the logging context."""
    _logging_context.set({})


def new_request_id(incoming: Optional[str] = None) -> str:
    """Reuse a caller-supplied request id or mint a new one."""
    if incoming and incoming.strip():
        return incoming.strip()[:64]
    return uuid.uuid4().hex


def configure_logging(level: Optional[str] = None, log_file: Optional[Path] = None) -> None:
    """
    Install console (and optional rotating file) handlers on the root logger.

    Safe to call more than once; handlers are only added the first time.

    Args:
        level: Log level name (defaults to AppConfig.LOG_LEVEL)
        log_file: Rotating log file path (defaults to AppConfig.log_file())
    """
    global _configured
    if _configured:
        return

    level_name = (level or AppConfig.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    log_formatter = logging.Formatter(LOG_FORMAT)
    context_filter = RequestContextFilter()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler.addFilter(context_filter)
    console_handler.setLevel(log_level)
    root_logger.addHandler(console_handler)

    log_file = log_file or AppConfig.log_file()
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        # File handler with rotation (10MB per file, keep 5 backups)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(log_formatter)
        file_handler.addFilter(context_filter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)

    _configured = True
    logging.getLogger(__name__).info(
        f"Logging initialized: level={level_name}, file={log_file or 'disabled'}"
    )
