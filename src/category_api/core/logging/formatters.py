# src/category_api/core/logging/formatters.py
"""
Custom logging formatters.

  - JsonFormatter: one JSON object per line for log collectors. Carries the
    observability fields (service, env, version, request_id) plus any `extra`
    passed at the call site, e.g.

        logger.info("repo.save.success", extra={"id": 7, "duration_ms": 3})

  - ColorFormatter: compact ANSI-colored lines for a developer terminal.

builder.py picks one of them from settings.LOG_FORMAT.
"""

import json
import logging
from typing import Any
from logging import LogRecord
from ...utils.logging import get_project_version

PROJECT_VERSION = get_project_version()

# Attributes every LogRecord has; anything else on the record came from `extra`.
_RESERVED_ATTRS = set(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "request_id"}


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter.

    Construction:
      - env: environment name (e.g., "development" | "production")
      - service: logical service name included in every line
      - datefmt: optional date format used by formatTime

    Non-serializable extras are converted with str(); format() never raises
    because of an extra value.
    """

    def __init__(self, *, env: str | None = None, service: str = "category-api", datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "request_id": getattr(record, "request_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in log_record or key.startswith("_"):
                continue
            try:
                json.dumps(value)
                log_record[key] = value
            except (TypeError, ValueError):
                log_record[key] = str(value)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """
    Development formatter:

        TIMESTAMP | LEVEL | LOGGER | REQUEST_ID | MESSAGE [key=value ...]

    The level is colored with ANSI codes; tracebacks follow on new lines.
    """

    COLOR_CODES = {
        "DEBUG": "\033[1;36m",     # bold cyan
        "INFO": "\033[32m",        # green
        "WARNING": "\033[33m",     # yellow
        "ERROR": "\033[31m",       # red
        "CRITICAL": "\033[1;41m",  # bold on red background
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"]
        timestamp = self.formatTime(record, self.datefmt)

        extras = " ".join(
            f"{k}={v}"
            for k, v in record.__dict__.items()
            if k not in _RESERVED_ATTRS and not k.startswith("_")
        )

        base = (
            f"{timestamp} | {color}{record.levelname:<8}{reset} | "
            f"{record.name:<40} | "
            f"{getattr(record, 'request_id', '-'):<36} | "
            f"{record.getMessage()}"
        )
        if extras:
            base = f"{base} {extras}"

        if record.exc_info:
            base = base + "\n" + self.formatException(record.exc_info)

        return base
