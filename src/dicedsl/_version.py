"""Version lookup for dicedsl."""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

_PYPROJECT = Path(__file__).parent.parent.parent / "pyproject.toml"


def get_version() -> str:
    """Version from a source checkout's pyproject.toml, else installed metadata."""
    if _PYPROJECT.is_file():
        with _PYPROJECT.open("rb") as fh:
            project = tomllib.load(fh).get("project", {})
        if project.get("name") == "dicedsl" and "version" in project:
            return str(project["version"])
    try:
        return _metadata_version("dicedsl")
    except PackageNotFoundError:
        return "0.0.0"
