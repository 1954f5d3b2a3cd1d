from .config_validators import to_uppercase, to_lowercase
from .category_validators import validate_category_request, violations_from_errors

__all__ = [
    "to_uppercase",
    "to_lowercase",
    "validate_category_request",
    "violations_from_errors",
]
