"""
Handler factories for logging.dictConfig.

Each function returns a handler configuration dict; builder.py places them
under names ("console", "file", "error_file", "error_console").
"""

from pathlib import Path

from ...config.settings import Settings

_FILTERS = ["request_id", "redact"]


def _formatter_name(settings: Settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def get_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filters": _FILTERS,
    }


def get_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filename": str(Path(settings.LOG_DIR) / "app.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": _FILTERS,
    }


def get_error_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "json",  # error files stay structured
        "level": "ERROR",
        "filename": str(Path(settings.LOG_DIR) / "errors.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": _FILTERS,
    }


def get_error_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": "json",
        "level": "ERROR",
        "filters": _FILTERS,
    }
