"""
Script: ci_tools/project.py
What: Reads the artifact name and version from `pyproject.toml`.
Doing: Parses project metadata and derives the wheel filename the packaging step produces.
Why: Keeps the artifact name in one place (the build descriptor) instead of hardcoding it in helpers.
Goal: Let every step agree on which file is "the artifact".
"""

from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass
from pathlib import Path

from ci_tools.common import REPO_ROOT, CiToolError


PYPROJECT_PATH = REPO_ROOT / "pyproject.toml"
DIST_DIR_NAME = "dist"
# Pure-Python wheel, no compiled code: python tag `py3`, no ABI, any platform.
WHEEL_TAG = "py3-none-any"

NAME_SEPARATORS_RE = re.compile(r"[-_.]+")


@dataclass(frozen=True)
class ArtifactInfo:
    name: str
    version: str

    @property
    def wheel_filename(self) -> str:
        return wheel_filename(self.name, self.version)

    def wheel_path(self, root: Path = REPO_ROOT) -> Path:
        return root / DIST_DIR_NAME / self.wheel_filename

    @property
    def relative_wheel_path(self) -> str:
        """Path relative to the project root, as the Dockerfile refers to it."""
        return f"{DIST_DIR_NAME}/{self.wheel_filename}"


def normalize_distribution_name(name: str) -> str:
    """
    Normalize a distribution name for use in a wheel filename.

    Example: `Demo-App` becomes `demo_app`.
    """
    return NAME_SEPARATORS_RE.sub("_", name).lower()


def wheel_filename(name: str, version: str) -> str:
    return f"{normalize_distribution_name(name)}-{version}-{WHEEL_TAG}.whl"


def parse_project_metadata(document: dict) -> ArtifactInfo:
    """Read `[project].name` and `[project].version` from a parsed pyproject document."""
    project = document.get("project") or {}
    name = str(project.get("name") or "")
    version = str(project.get("version") or "")
    if not name:
        raise CiToolError("pyproject.toml is missing [project].name")
    if not version:
        raise CiToolError("pyproject.toml is missing a static [project].version")
    return ArtifactInfo(name=name, version=version)


def load_pyproject(pyproject_path: Path = PYPROJECT_PATH) -> dict:
    """Parse the build descriptor, raising `CiToolError` when it is missing or malformed."""
    if not pyproject_path.exists():
        raise CiToolError(f"Build descriptor not found: {pyproject_path}")
    with pyproject_path.open("rb") as handle:
        try:
            return tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise CiToolError(f"Failed to parse {pyproject_path}: {exc}") from exc


def load_artifact_info(pyproject_path: Path = PYPROJECT_PATH) -> ArtifactInfo:
    return parse_project_metadata(load_pyproject(pyproject_path))


def load_console_scripts(pyproject_path: Path = PYPROJECT_PATH) -> dict[str, str]:
    """Return `[project.scripts]` as `{script name: "module:function"}`."""
    document = load_pyproject(pyproject_path)
    scripts = (document.get("project") or {}).get("scripts") or {}
    return {str(key): str(value) for key, value in scripts.items()}
