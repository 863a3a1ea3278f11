"""
Script: ci_tools/check_artifact_consistency.py
What: Checks that the Dockerfile installs and runs the artifact the build actually produces.
Doing: Compares wheel paths and the `ENTRYPOINT` command in the Dockerfile with `pyproject.toml`.
Why: Bumping the version or renaming the project in one file but not the other breaks the image build late.
Goal: Catch name/version drift before any image is built.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from ci_tools.common import REPO_ROOT, CiToolError, optional_env, read_stripped_lines
from ci_tools.project import ArtifactInfo, load_artifact_info, load_console_scripts


WHEEL_REF_RE = re.compile(r"dist/[^\s\"']+\.whl")


def dockerfile_wheel_refs(lines: list[str]) -> list[str]:
    """Return every `dist/*.whl` path mentioned in the given Dockerfile lines."""
    refs: list[str] = []
    for line in lines:
        refs.extend(WHEEL_REF_RE.findall(line))
    return refs


def instruction_name(line: str) -> str:
    # Dockerfile keywords are case-insensitive.
    parts = line.split(None, 1)
    return parts[0].upper() if parts else ""


def entrypoint_command(entrypoint_line: str) -> str:
    """
    Return the executable named by an `ENTRYPOINT` line.

    Only the exec (JSON array) form is accepted, since that is what runs the
    artifact directly without a shell in between.
    """
    keyword_and_rest = entrypoint_line.split(None, 1)
    payload = keyword_and_rest[1] if len(keyword_and_rest) == 2 else ""
    try:
        parts = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise CiToolError(f"ENTRYPOINT must use exec form: {entrypoint_line}") from exc
    if not isinstance(parts, list) or not parts:
        raise CiToolError(f"ENTRYPOINT must be a non-empty JSON array: {entrypoint_line}")
    return str(parts[0])


def find_consistency_problems(
    *,
    info: ArtifactInfo,
    console_scripts: dict[str, str],
    dockerfile_lines: list[str],
) -> list[str]:
    problems: list[str] = []

    wheel_refs = dockerfile_wheel_refs(dockerfile_lines)
    if not wheel_refs:
        problems.append("Dockerfile does not reference any dist/*.whl artifact")
    for ref in wheel_refs:
        if ref != info.relative_wheel_path:
            problems.append(
                f"Dockerfile references {ref}, but packaging produces {info.relative_wheel_path}"
            )

    entrypoints = [line for line in dockerfile_lines if instruction_name(line) == "ENTRYPOINT"]
    if len(entrypoints) != 1:
        problems.append(f"Expected exactly one ENTRYPOINT, found {len(entrypoints)}")
        return problems

    try:
        command = entrypoint_command(entrypoints[0])
    except CiToolError as exc:
        problems.append(str(exc))
    else:
        if command not in console_scripts:
            declared = ", ".join(sorted(console_scripts)) or "none"
            problems.append(
                f"ENTRYPOINT runs {command}, which is not a declared console script ({declared})"
            )
    return problems


def read_dockerfile_instructions(dockerfile_path: Path) -> list[str]:
    # Only instruction lines matter here; comments would otherwise match wheel refs.
    return [
        line
        for line in read_stripped_lines(dockerfile_path)
        if line and not line.startswith("#")
    ]


def main() -> None:
    dockerfile_path = REPO_ROOT / optional_env("DOCKERFILE", "Dockerfile")
    pyproject_path = REPO_ROOT / "pyproject.toml"

    info = load_artifact_info(pyproject_path)
    problems = find_consistency_problems(
        info=info,
        console_scripts=load_console_scripts(pyproject_path),
        dockerfile_lines=read_dockerfile_instructions(dockerfile_path),
    )
    if problems:
        raise CiToolError("Artifact consistency check failed:\n" + "\n".join(problems))

    print(f"Dockerfile matches artifact: {info.relative_wheel_path}")


if __name__ == "__main__":
    main()
