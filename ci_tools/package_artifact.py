"""
Script: ci_tools/package_artifact.py
What: Builds the application wheel.
Doing: Runs `pip wheel` into `dist/`, then checks the version-stamped wheel is really there.
Why: Later steps (Dockerfile, publish) rely on one exact artifact path.
Goal: Produce `dist/<name>-<version>-py3-none-any.whl` or fail loudly.
"""

from __future__ import annotations

from pathlib import Path

from ci_tools.common import REPO_ROOT, CiToolError, python_executable, run_cmd, write_github_outputs
from ci_tools.project import DIST_DIR_NAME, ArtifactInfo, load_artifact_info


def build_package_command(dist_dir: str = DIST_DIR_NAME) -> list[str]:
    # `--no-deps`: only our own wheel goes into dist/, not wheels of dependencies.
    return [python_executable(), "-m", "pip", "wheel", "--no-deps", "--wheel-dir", dist_dir, "."]


def verify_artifact(info: ArtifactInfo, root: Path) -> Path:
    """Return the expected artifact path, raising if packaging did not produce it."""
    wheel_path = info.wheel_path(root)
    if not wheel_path.is_file():
        dist_dir = wheel_path.parent
        found = sorted(p.name for p in dist_dir.glob("*.whl")) if dist_dir.is_dir() else []
        raise CiToolError(
            f"Expected artifact {info.relative_wheel_path} was not produced. "
            f"Found in {DIST_DIR_NAME}/: {', '.join(found) or 'nothing'}"
        )
    return wheel_path


def package_artifact(root: Path = REPO_ROOT) -> Path:
    info = load_artifact_info(root / "pyproject.toml")
    run_cmd(build_package_command(), cwd=str(root), capture_output=False)
    return verify_artifact(info, root)


def main() -> None:
    wheel_path = package_artifact()
    relative_path = wheel_path.relative_to(REPO_ROOT).as_posix()
    write_github_outputs({"artifact_path": relative_path, "artifact_name": wheel_path.name})
    print(f"Built artifact: {relative_path}")


if __name__ == "__main__":
    main()
