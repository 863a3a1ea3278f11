from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Mapping

from ci_tools.common import CiToolError


def command_map() -> dict[str, Callable[[], None]]:
    """
    Map CLI command names to Python entry functions.

    Each value is a `main()` function from one workflow helper module.
    """
    from ci_tools.build_image import main as build_image
    from ci_tools.check_artifact_consistency import main as check_artifact_consistency
    from ci_tools.compute_image_refs import main as compute_image_refs
    from ci_tools.package_artifact import main as package_artifact
    from ci_tools.publish_image import main as publish_image
    from ci_tools.run_pipeline import main as run_pipeline
    from ci_tools.run_tests import main as run_tests
    from ci_tools.smoke_test_image import main as smoke_test_image

    return {
        "run-tests": run_tests,
        "check-artifact-consistency": check_artifact_consistency,
        "package-artifact": package_artifact,
        "compute-image-refs": compute_image_refs,
        "build-image": build_image,
        "smoke-test-image": smoke_test_image,
        "publish-image": publish_image,
        "run-pipeline": run_pipeline,
    }


def build_parser(commands: Mapping[str, Callable[[], None]]) -> argparse.ArgumentParser:
    """Build argument parser with one positional command choice."""
    parser = argparse.ArgumentParser(
        prog="python3 -m ci_tools.cli",
        description="Run one pipeline helper command.",
    )
    parser.add_argument("command", choices=sorted(commands.keys()))
    return parser


def run_command(command: str, commands: Mapping[str, Callable[[], None]]) -> None:
    """
    Run one registered command.

    `commands` is passed in to keep this function easy to test.
    """
    commands[command]()


def main(argv: list[str] | None = None) -> None:
    # Build command registry once so parser and dispatcher use the same keys.
    commands = command_map()
    parser = build_parser(commands)
    args = parser.parse_args(argv)

    try:
        run_command(args.command, commands)
    except CiToolError as exc:
        # Keep failures short and readable in workflow logs.
        print(str(exc), file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
