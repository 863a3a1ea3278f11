"""
Script: ci_tools/smoke_test_image.py
What: Runs the freshly built image once and checks what it prints.
Doing: Calls `<engine> run --rm <ref>` and compares stdout with the app greeting.
Why: A green unit test does not prove the image entry point runs the packaged artifact.
Goal: Block publishing when the container does not print exactly one greeting line.
"""

from __future__ import annotations

from ci_tools.common import CiToolError, container_engine, run_cmd
from ci_tools.compute_image_refs import build_refs_from_env
from demo_app.app import GREETING


def check_greeting_output(output: str, expected: str = GREETING) -> None:
    """Raise unless `output` is exactly one line equal to `expected`."""
    lines = output.splitlines()
    if lines != [expected]:
        raise CiToolError(
            f"Unexpected container output. Expected one line {expected!r}, got {lines!r}"
        )


def smoke_test_image(image_ref: str, *, engine: str) -> None:
    # run_cmd raises on a non-zero exit, so reaching the check means exit code 0.
    output = run_cmd([engine, "run", "--rm", image_ref])
    check_greeting_output(output)


def main() -> None:
    image_ref = build_refs_from_env()[0]
    smoke_test_image(image_ref, engine=container_engine())
    print(f"Smoke test passed: {image_ref}")


if __name__ == "__main__":
    main()
