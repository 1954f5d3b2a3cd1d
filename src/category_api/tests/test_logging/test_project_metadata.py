# src/category_api/tests/test_logging/test_project_metadata.py
from category_api.utils.logging import find_pyproject, get_pyproject_value

PYPROJECT = """
[project]
name = "demo-service"
version = "1.2.3"
"""


def test_finds_pyproject_in_parent(tmp_path):
    (tmp_path / "pyproject.toml").write_text(PYPROJECT)
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_pyproject(nested) == tmp_path / "pyproject.toml"


def test_reads_dotted_key(tmp_path):
    (tmp_path / "pyproject.toml").write_text(PYPROJECT)

    assert get_pyproject_value("project.version", start=tmp_path) == "1.2.3"
    assert get_pyproject_value("project.missing", start=tmp_path, default="x") == "x"


def test_invalid_toml_returns_default(tmp_path):
    (tmp_path / "pyproject.toml").write_text("[project\nname=")

    assert get_pyproject_value("project.name", start=tmp_path, default="fallback") == "fallback"
