
# category_api/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   └── base.py                    # App-level errors (NotFoundError, ValidationError, StoreError, ...)

from .base import (
    CategoryAPIError,
    NotFoundError,
    ValidationError,
    StoreError,
    TransactionError,
)

__all__ = [
    "CategoryAPIError",
    "NotFoundError",
    "ValidationError",
    "StoreError",
    "TransactionError",
]
