"""
Script: ci_tools/common.py
What: Shared helper functions used by all `ci_tools` modules.
Doing: Wraps env reads, command execution, project metadata reads, and output writes.
Why: Avoids duplicated helper code.
Goal: Keep behavior consistent across all helper modules.
"""

from __future__ import annotations

import os
import re
import subprocess
import sys
from pathlib import Path
from typing import Mapping, Sequence


class CiToolError(RuntimeError):
    """Raised when a workflow helper script hits a known error condition."""


REPO_ROOT = Path(__file__).resolve().parent.parent


def require_env(name: str) -> str:
    """Return a required environment variable or raise a clear error."""
    value = os.environ.get(name)
    if value is None or value == "":
        raise CiToolError(f"Missing required environment variable: {name}")
    return value


def optional_env(name: str, default: str = "") -> str:
    """Return an environment variable with a fallback default."""
    return os.environ.get(name, default)


def env_flag(name: str, default: bool = False) -> bool:
    """Read a `true`/`false` style environment variable."""
    return optional_env(name, "true" if default else "false").strip().lower() == "true"


def python_executable() -> str:
    """Interpreter used for `python -m ...` steps; same one running the helpers."""
    return sys.executable or "python3"


def run_cmd(
    args: Sequence[str],
    *,
    capture_output: bool = True,
    cwd: str | None = None,
    input_text: str | None = None,
) -> str:
    """Run a command and return stdout, raising a readable error on failure."""
    try:
        result = subprocess.run(
            list(args),
            check=True,
            text=True,
            capture_output=capture_output,
            cwd=cwd,
            input=input_text,
        )
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        stdout = (exc.stdout or "").strip()
        details = stderr or stdout or str(exc)
        raise CiToolError(f"Command failed: {' '.join(args)}\n{details}") from exc
    except FileNotFoundError as exc:
        raise CiToolError(f"Command not found: {args[0]}") from exc

    if not capture_output:
        return ""
    return result.stdout


def write_github_outputs(values: Mapping[str, str]) -> None:
    """
    Write step outputs for GitHub Actions.

    GitHub provides a file path in `GITHUB_OUTPUT`; writing `name=value` lines
    there makes that value available to later steps in the same job.

    Outside of GitHub Actions (no `GITHUB_OUTPUT`), this is a no-op so the same
    helpers can run from a local shell.
    """
    output_file = optional_env("GITHUB_OUTPUT")
    if not output_file:
        return
    with open(output_file, "a", encoding="utf-8") as handle:
        for key, value in values.items():
            handle.write(f"{key}={value}\n")


def normalize_owner(owner: str) -> str:
    """
    Normalize a GitHub owner/org for container image paths.

    Here, "normalize" means converting to lowercase.
    Example: `Octo-Org` becomes `octo-org`, so image refs are consistent:
    `ghcr.io/octo-org/...`.
    """
    return owner.lower()


def container_engine() -> str:
    """Container CLI to call (`docker` by default, `podman` also works)."""
    return optional_env("CONTAINER_ENGINE", "docker")


def read_stripped_lines(file_path: Path) -> list[str]:
    """Return every line of a text file with surrounding whitespace removed."""
    if not file_path.exists():
        raise CiToolError(f"File not found: {file_path}")
    return [line.strip() for line in file_path.read_text(encoding="utf-8").splitlines()]


SHORT_SHA_LENGTH = 7
HEX_SHA_RE = re.compile(r"^[0-9a-f]{7,40}$")


def short_sha(sha: str) -> str:
    """Return the short form of a git commit SHA, as shown by `git log --oneline`."""
    value = sha.strip().lower()
    if not HEX_SHA_RE.match(value):
        raise CiToolError(f"Not a git commit SHA: {sha}")
    return value[:SHORT_SHA_LENGTH]
