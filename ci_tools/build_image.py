"""
Script: ci_tools/build_image.py
What: Builds the application container image.
Doing: Runs `<engine> build` once with a `-t` flag for every registry ref.
Why: One build, many tags keeps both registries on identical image content.
Goal: Leave a locally tagged image ready for smoke testing and publishing.
"""

from __future__ import annotations

from ci_tools.common import REPO_ROOT, CiToolError, container_engine, optional_env, run_cmd
from ci_tools.compute_image_refs import build_refs_from_env


def build_image_command(
    *,
    engine: str,
    refs: list[str],
    dockerfile: str = "Dockerfile",
    context: str = ".",
) -> list[str]:
    if not refs:
        raise CiToolError("No image refs to tag the build with")
    command = [engine, "build", "--file", dockerfile]
    for ref in refs:
        command.extend(["--tag", ref])
    command.append(context)
    return command


def main() -> None:
    refs = build_refs_from_env()
    command = build_image_command(
        engine=container_engine(),
        refs=refs,
        dockerfile=optional_env("DOCKERFILE", "Dockerfile"),
    )
    # Build output can be long; stream it instead of capturing.
    run_cmd(command, cwd=str(REPO_ROOT), capture_output=False)
    print(f"Built image with {len(refs)} tags")


if __name__ == "__main__":
    main()
