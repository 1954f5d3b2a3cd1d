# src/category_api/core/logging/builder.py
"""
Logging builder: build and apply a dictConfig configuration from Settings.

 - formatters: "standard" (ColorFormatter in text mode, plain Formatter otherwise) and "json"
 - filters: "request_id", "redact"
 - handlers: "console" always; "file" + "error_file" when logging to LOG_DIR,
   "error_console" when logging to stdout/stderr
 - loggers: root, uvicorn.error, uvicorn.access, sqlalchemy.engine, sqlalchemy.pool

Settings knobs: LOG_LEVEL, LOG_FORMAT, LOG_TO_STDOUT, LOG_DIR, LOG_MAX_BYTES,
LOG_BACKUP_COUNT, ENABLE_SQL_LOGGING, ENV.
"""

from __future__ import annotations

from pathlib import Path
import logging
import logging.config

from ...utils.logging import get_project_name
from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)

# Settings type only; get_settings() is not called here to avoid import-time side effects
from ...config.settings import Settings


def _writes_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def _logger(level: str, handlers: list[str], propagate: bool = False) -> dict:
    return {"level": level, "handlers": handlers, "propagate": propagate}


def make_dict_config(settings: Settings) -> dict:
    """Build the dictConfig mapping for `settings`."""
    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    all_handlers = list(handlers)
    sql_level = "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
            },
            "json": {"()": JsonFormatter, "env": settings.ENV, "service": get_project_name()},
        },
        "filters": {
            "request_id": {"()": RequestIdFilter},
            "redact": {"()": RedactFilter},
        },
        "handlers": handlers,
        "loggers": {
            "": _logger(settings.LOG_LEVEL, all_handlers, propagate=True),
            "uvicorn.error": _logger(settings.LOG_LEVEL, all_handlers),
            "uvicorn.access": _logger("INFO", ["console"]),
            # SQL logging may contain bound values; off unless explicitly enabled
            "sqlalchemy.engine": _logger(sql_level, ["console"]),
            "sqlalchemy.pool": _logger(sql_level, ["console"]),
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Apply the logging configuration for `settings`.

    Creates LOG_DIR when logs go to files, applies dictConfig, and attaches a
    RequestIdFilter to the root logger so `%(request_id)s` is always resolvable.
    """
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    root = logging.getLogger()
    if not any(isinstance(f, RequestIdFilter) for f in root.filters):
        root.addFilter(RequestIdFilter())
