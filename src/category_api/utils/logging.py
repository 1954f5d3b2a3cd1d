"""
Project metadata lookups used by the logging formatters (service name, version).

The installed distribution metadata is preferred; a source checkout falls back to
the nearest pyproject.toml.
"""

import tomllib
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any

DISTRIBUTION_NAME = "category-api"


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    """Nearest pyproject.toml in `start` or one of its first `max_up - 1` parents."""
    for directory in [start, *start.parents][:max_up]:
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def get_pyproject_value(
    key: str,
    start: str | Path | None = None,
    max_up: int = 5,
    default: Any = None,
) -> Any:
    """
    Look up dot-separated `key` (e.g. "project.version") in the nearest pyproject.toml.

    `start` defaults to this module's folder. Returns `default` when the file is
    missing, unreadable, or lacks the key.
    """
    start_path = Path(start).resolve() if start is not None else Path(__file__).resolve().parent
    pyproject = find_pyproject(start_path, max_up=max_up)
    if pyproject is None:
        return default

    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return default

    node: Any = data
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node


def get_project_name(default: str = DISTRIBUTION_NAME) -> str:
    return get_pyproject_value("project.name", default=default)


def get_project_version(default: str = "unknown") -> str:
    try:
        return importlib_metadata.version(DISTRIBUTION_NAME)
    except importlib_metadata.PackageNotFoundError:
        version = get_pyproject_value("project.version")
        return default if version is None else version


__all__ = [
    "find_pyproject",
    "get_pyproject_value",
    "get_project_name",
    "get_project_version",
]
