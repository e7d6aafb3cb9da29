"""
Structured logging for Pixlink.

Each logger writes one line per record to stdout, as JSON or as plain text
depending on ``PIXLINK_LOG_FORMAT``. Keyword arguments passed to a log call
become fields of the record.
"""
import logging
import sys
import json
import time
import traceback
from datetime import datetime, timezone
from functools import wraps
from typing import Dict, Optional

from .config import get_settings

settings = get_settings()


class StructuredLogger:
    """Thin wrapper that carries keyword context into the log record."""

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter() if settings.log_format == "json" else TextFormatter())
        self.logger.handlers = [handler]

    def _log(self, level: int, message: str, context: dict):
        self.logger.log(level, message, extra={"context": context})

    def debug(self, message: str, **context):
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, **context):
        self._log(logging.INFO, message, context)

    def warning(self, message: str, **context):
        self._log(logging.WARNING, message, context)

    def error(self, message: str, error: Optional[Exception] = None, **context):
        if error:
            context["error_type"] = type(error).__name__
            context["traceback"] = traceback.format_exc()
        self._log(logging.ERROR, message, context)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(getattr(record, "context", {}))
        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname:<7} {record.name}: {record.getMessage()}"
        context = getattr(record, "context", {})
        fields = " ".join(f"{k}={v}" for k, v in context.items() if k != "traceback")
        return f"{line} ({fields})" if fields else line


def timed(logger: StructuredLogger):
    """Log how long the wrapped call took, at debug level."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                logger.debug(
                    f"{func.__name__} finished",
                    duration_ms=round((time.perf_counter() - start) * 1000, 2),
                )

        return wrapper

    return decorator


_loggers: Dict[str, StructuredLogger] = {}


def get_logger(name: str) -> StructuredLogger:
    """Get or create the ``pixlink.<name>`` logger."""
    full_name = f"pixlink.{name}"
    if full_name not in _loggers:
        _loggers[full_name] = StructuredLogger(full_name)
    return _loggers[full_name]


api_logger = get_logger("api")
service_logger = get_logger("services")
