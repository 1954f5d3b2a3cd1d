# src/category_api/core/logging/filters.py
"""
Logging filters.

- RequestIdFilter: guarantees every LogRecord carries `request_id`, read from a
  contextvar that RequestIDMiddleware sets per HTTP request ("-" outside a request).
  A ContextVar follows the request across `await` boundaries, which threading.local
  would not.
- RedactFilter: masks record attributes whose name marks them as secret
  (passwords, tokens, the API key header, ...).

Both filters always return True; they annotate records and never drop them.
"""

import logging
from logging import LogRecord
import contextvars

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """
    Set the request id in the current context and return the token to allow reset.
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token) -> None:
    """Restore the value saved in `token` (returned by set_request_id)."""
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Set `record.request_id` to, in order of preference:
      - the value passed explicitly via `extra={"request_id": ...}`
      - the contextvar value set by the middleware
      - the sentinel "-"
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {
        "password",
        "secret",
        "token",
        "access_token",
        "refresh_token",
        "authorization",
        "api_key",
        "x_api_key",
        "x-api-key",
    }
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
