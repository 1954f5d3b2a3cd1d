"""
Application-level exceptions.

Services and the transaction wrapper raise these; the HTTP error handlers in
`category_api.api.v1.error_handlers` turn them into envelope responses.
"""

from typing import Iterable


class CategoryAPIError(Exception):
    """
    Base exception for service/store errors.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of field names related to the error (e.g., ['name'])
    - error_code: canonical short code (e.g., 'not_found', 'invalid_input') used by clients
    """

    # Map canonical error_code -> HTTP status.
    ERROR_CODE_TO_STATUS = {
        "invalid_input": 400,
        "not_found": 404,
        "store_error": 500,
        "transaction_failed": 500,
    }

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def http_status(self) -> int:
        """
        Return the HTTP status code that should accompany this error.
        Unknown or missing error codes are server errors (500).
        """
        if self.error_code:
            return self.ERROR_CODE_TO_STATUS.get(self.error_code, 500)
        return 500


class NotFoundError(CategoryAPIError):
    """Raised when a lookup by id yields no row."""

    def __init__(self, message: str = "category is not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="not_found")


class ValidationError(CategoryAPIError):
    """
    Raised when request input fails structural rules.

    `violations` keeps one (field, message) pair per violated rule, in the order the
    validator reported them. `fields` is derived from it.
    """

    def __init__(self, violations: Iterable[tuple[str, str]], message: str = "invalid request"):
        self.violations = list(violations)
        fields = list(dict.fromkeys(field for field, _ in self.violations))
        super().__init__(message, fields=fields, error_code="invalid_input")

    def describe(self) -> str:
        """Render every violation as '<field>: <message>' joined by '; '."""
        return "; ".join(f"{field}: {msg}" for field, msg in self.violations)


class StoreError(CategoryAPIError):
    """Generic data store failure."""

    def __init__(self, message: str = "data store failure"):
        super().__init__(message, error_code="store_error")


class TransactionError(StoreError):
    """Commit or rollback itself failed; the transaction outcome is unknown."""

    def __init__(self, message: str):
        super().__init__(message)
        self.error_code = "transaction_failed"


__all__ = [
    "CategoryAPIError",
    "NotFoundError",
    "ValidationError",
    "StoreError",
    "TransactionError",
]
