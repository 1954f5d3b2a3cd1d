from typing import Any, Iterable, Mapping

from pydantic import ValidationError as PydanticValidationError

from ..exceptions.base import ValidationError
from ..schemas.category import CategoryRequest

# Location prefixes FastAPI puts in front of the field name
_LOCATION_PREFIXES = {"body", "path", "query", "header", "cookie"}


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(p) for p in loc]
    if parts and parts[0] in _LOCATION_PREFIXES and len(parts) > 1:
        parts = parts[1:]
    return ".".join(parts) or "body"


def violations_from_errors(errors: Iterable[Mapping[str, Any]]) -> list[tuple[str, str]]:
    """
    Turn pydantic/FastAPI error dicts (`exc.errors()`) into (field, message) pairs.

        [{"loc": ("body", "name"), "msg": "String should have at least 1 character", ...}]
        -> [("name", "String should have at least 1 character")]
    """
    return [(_field_name(err.get("loc", ())), str(err.get("msg", "invalid value"))) for err in errors]


def validate_category_request(payload: Any) -> CategoryRequest:
    """
    Validate a decoded JSON body as a CategoryRequest.

    Raises:
        ValidationError: listing every violated field (e.g. empty or missing `name`).
    """
    try:
        return CategoryRequest.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(violations_from_errors(exc.errors())) from exc
